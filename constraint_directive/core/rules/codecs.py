"""
Scalar codecs.

The dispatcher treats the host type system as a codec: decode an incoming
value to a native value and encode it again for output. graphql-core's
built-in scalars already satisfy ``ScalarCodec``; the plain codecs below serve
the config-driven path where there is no host schema.
"""

import math
from typing import Any, Protocol


class ScalarCodec(Protocol):
    """Decode/encode pair for one scalar type."""

    def serialize(self, value: Any) -> Any:
        ...

    def parse_value(self, value: Any) -> Any:
        ...

    def parse_literal(self, value_node: Any, variables: dict[str, Any] | None = None) -> Any:
        ...


class StringCodec:
    name = "String"

    def serialize(self, value: Any) -> str:
        return self.parse_value(value)

    def parse_value(self, value: Any) -> str:
        if not isinstance(value, str):
            raise TypeError(f"String cannot represent a non string value: {value!r}")
        return value

    def parse_literal(self, value_node: Any, variables: dict[str, Any] | None = None) -> str:
        return self.parse_value(value_node)


class IntCodec:
    name = "Int"

    def serialize(self, value: Any) -> int:
        return self.parse_value(value)

    def parse_value(self, value: Any) -> int:
        if isinstance(value, bool):
            raise TypeError(f"Int cannot represent non-integer value: {value!r}")
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return int(value)
        if not isinstance(value, int):
            raise TypeError(f"Int cannot represent non-integer value: {value!r}")
        return value

    def parse_literal(self, value_node: Any, variables: dict[str, Any] | None = None) -> int:
        return self.parse_value(value_node)


class FloatCodec:
    name = "Float"

    def serialize(self, value: Any) -> float:
        return self.parse_value(value)

    def parse_value(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise TypeError(f"Float cannot represent non numeric value: {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"Float cannot represent non numeric value: {value!r}")
        return float(value)

    def parse_literal(self, value_node: Any, variables: dict[str, Any] | None = None) -> float:
        return self.parse_value(value_node)


CODECS: dict[str, ScalarCodec] = {
    "String": StringCodec(),
    "Int": IntCodec(),
    "Float": FloatCodec(),
}
