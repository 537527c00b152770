"""
Declared field types and their classification into constrainable kinds.
"""

from enum import Enum
from typing import NamedTuple


class TypeRef(NamedTuple):
    """
    Host-neutral description of a declared field type.

    ``TypeRef("String", non_null=True, is_list=True)`` is ``[String]!``.
    """

    name: str
    non_null: bool = False
    is_list: bool = False
    element_non_null: bool = False

    def __str__(self) -> str:
        rendered = self.name
        if self.is_list:
            rendered = f"[{rendered}{'!' if self.element_non_null else ''}]"
        return f"{rendered}!" if self.non_null else rendered


class FieldKind(Enum):
    """The eight kinds of field a constraint can be attached to."""

    STRING = "String"
    NON_NULL_STRING = "NonNullString"
    NUMBER = "Number"
    NON_NULL_NUMBER = "NonNullNumber"
    LIST_OF_STRING = "ListOfString"
    NON_NULL_LIST_OF_STRING = "NonNullListOfString"
    LIST_OF_NUMBER = "ListOfNumber"
    NON_NULL_LIST_OF_NUMBER = "NonNullListOfNumber"

    @property
    def non_null(self) -> bool:
        return self.value.startswith("NonNull")

    @property
    def is_list(self) -> bool:
        return "List" in self.value

    @property
    def element_category(self) -> str:
        """Category of the scalar values: "string" or "number"."""
        return "string" if self.value.endswith("String") else "number"

    @property
    def category(self) -> str:
        """Validator category: "string", "number" or "list"."""
        return "list" if self.is_list else self.element_category

    @classmethod
    def of(cls, element_category: str, is_list: bool, non_null: bool) -> "FieldKind":
        return _KINDS[(element_category, is_list, non_null)]


_KINDS = {
    (kind.element_category, kind.is_list, kind.non_null): kind
    for kind in FieldKind
}
