"""
ValidationOptions model carrying predicate configuration (ephemeral).
"""

import os
import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


DEFAULT_LOCALE = "en-US"

# Declared locales are only honoured when they look like a locale tag
LOCALE_PATTERN = re.compile(r"^\w+(-\w+)*$")


class EmailOptions(BaseModel):
    """Options for the ``email`` format."""

    model_config = ConfigDict(frozen=True)

    allow_display_name: bool = False
    require_display_name: bool = False
    allow_utf8_local_part: bool = True
    require_tld: bool = True
    allow_ip_domain: bool = False


class DomainNameOptions(BaseModel):
    """Options for the ``domain-name`` format."""

    model_config = ConfigDict(frozen=True)

    require_tld: bool = True
    allow_underscores: bool = False
    allow_trailing_dot: bool = False


class CurrencyOptions(BaseModel):
    """Options for the ``currency-amount`` format."""

    model_config = ConfigDict(frozen=True)

    symbol: str = "$"
    require_symbol: bool = False
    allow_space_after_symbol: bool = False
    symbol_after_digits: bool = False
    allow_negatives: bool = True
    parens_for_negatives: bool = False
    negative_sign_before_digits: bool = False
    negative_sign_after_digits: bool = False
    thousands_separator: str = ","
    decimal_separator: str = "."
    allow_decimal: bool = True
    require_decimal: bool = False
    digits_after_decimal: tuple[int, ...] = (2,)
    allow_space_after_digits: bool = False


class ValidationOptions(BaseModel):
    """
    Predicate configuration for one validation call.

    Built fresh for every call by ``merged()``, in precedence order:
    built-in defaults < locale declared on the constraint < caller options.

    Attributes:
        locale: Locale for alpha, alpha-numeric and mobile-phone formats
        hash_algorithm: Algorithm for the hash format
        country_code: Country for the postal-code format
        email: Email format options
        domain_name: Domain name format options
        currency: Currency amount format options
    """

    model_config = ConfigDict(frozen=True)

    locale: str = DEFAULT_LOCALE
    hash_algorithm: str = "md5"
    country_code: str = "US"
    email: EmailOptions = EmailOptions()
    domain_name: DomainNameOptions = DomainNameOptions()
    currency: CurrencyOptions = CurrencyOptions()

    @classmethod
    def defaults(cls) -> "ValidationOptions":
        """Built-in defaults; ``CONSTRAINT_DEFAULT_LOCALE`` overrides the locale."""
        return cls(locale=os.getenv("CONSTRAINT_DEFAULT_LOCALE", DEFAULT_LOCALE))

    @classmethod
    def merged(
        cls,
        declared_locale: str | None = None,
        overrides: "ValidationOptions | Mapping[str, Any] | None" = None,
    ) -> "ValidationOptions":
        """
        Merge defaults, the declared locale and caller overrides.

        Args:
            declared_locale: Locale declared on the constraint, if any
            overrides: Caller options (a ValidationOptions or a nested mapping)

        Returns:
            A new ValidationOptions instance
        """
        merged = cls.defaults().model_dump()

        if declared_locale and LOCALE_PATTERN.match(declared_locale):
            merged["locale"] = declared_locale

        if isinstance(overrides, ValidationOptions):
            overrides = overrides.model_dump(exclude_defaults=True)
        if overrides:
            merged = _deep_merge(merged, overrides)

        return cls.model_validate(merged)


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
