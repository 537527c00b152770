"""
Named string formats.

Maps each format name accepted by the ``format`` constraint to its canonical
failure message and to the predicate call that checks it.
"""

from typing import Callable, NamedTuple

from constraint_directive.core.models import ValidationOptions

from .predicates import DEFAULT_PREDICATES, PredicateLibrary


class FormatDefinition(NamedTuple):
    """A named format: failure message plus predicate invocation."""

    message: str
    check: Callable[[PredicateLibrary, str, ValidationOptions], bool]


FORMATS: dict[str, FormatDefinition] = {
    "alpha": FormatDefinition(
        "Must contain only alphabet characters",
        lambda p, v, o: p.is_alpha(v, o.locale),
    ),
    "alpha-numeric": FormatDefinition(
        "Must contain only alphabet and numeric characters",
        lambda p, v, o: p.is_alphanumeric(v, o.locale),
    ),
    "ascii": FormatDefinition(
        "Must contain only ASCII characters",
        lambda p, v, o: p.is_ascii(v),
    ),
    "byte": FormatDefinition(
        "Must be in byte format",
        lambda p, v, o: p.is_byte(v),
    ),
    "credit-card": FormatDefinition(
        "Must be a valid credit card number",
        lambda p, v, o: p.is_credit_card(v),
    ),
    "currency-amount": FormatDefinition(
        "Must be a valid currency amount",
        lambda p, v, o: p.is_currency(v, o.currency),
    ),
    "data-uri": FormatDefinition(
        "Must be in data uri format",
        lambda p, v, o: p.is_data_uri(v),
    ),
    "date": FormatDefinition(
        "Must be a date in ISO 8601 format",
        lambda p, v, o: p.is_date(v),
    ),
    "date-time": FormatDefinition(
        "Must be a date-time in RFC 3339 format",
        lambda p, v, o: p.is_date_time(v),
    ),
    "domain-name": FormatDefinition(
        "Must be a valid domain name",
        lambda p, v, o: p.is_domain_name(v, o.domain_name),
    ),
    "email": FormatDefinition(
        "Must be in email format",
        lambda p, v, o: p.is_email(v, o.email),
    ),
    "hash": FormatDefinition(
        "Must be in hash format",
        lambda p, v, o: p.is_hash(v, o.hash_algorithm),
    ),
    "hex-color": FormatDefinition(
        "Must be a valid hex color",
        lambda p, v, o: p.is_hex_color(v),
    ),
    "ipv4": FormatDefinition(
        "Must be in IP v4 format",
        lambda p, v, o: p.is_ipv4(v),
    ),
    "ipv6": FormatDefinition(
        "Must be in IP v6 format",
        lambda p, v, o: p.is_ipv6(v),
    ),
    "isbn": FormatDefinition(
        "Must be in ISBN format",
        lambda p, v, o: p.is_isbn(v),
    ),
    "magnet-uri": FormatDefinition(
        "Must be in magnet uri format",
        lambda p, v, o: p.is_magnet_uri(v),
    ),
    "mime-type": FormatDefinition(
        "Must be a valid MIME type",
        lambda p, v, o: p.is_mime_type(v),
    ),
    "mobile-phone": FormatDefinition(
        "Must be a valid mobile phone number",
        lambda p, v, o: p.is_mobile_phone(v, o.locale),
    ),
    "mongo-id": FormatDefinition(
        "Must be a valid Mongo ID",
        lambda p, v, o: p.is_mongo_id(v),
    ),
    "postal-code": FormatDefinition(
        "Must be a valid postal code",
        lambda p, v, o: p.is_postal_code(v, o.country_code),
    ),
    "uri": FormatDefinition(
        "Must be in URI format",
        lambda p, v, o: p.is_uri(v),
    ),
    "uuid": FormatDefinition(
        "Must be in UUID format",
        lambda p, v, o: p.is_uuid(v),
    ),
}

FORMATS["url"] = FORMATS["uri"]


def format_names() -> list[str]:
    """Sorted list of accepted format names (aliases included)."""
    return sorted(FORMATS)


__all__ = [
    "FORMATS",
    "FormatDefinition",
    "PredicateLibrary",
    "DEFAULT_PREDICATES",
    "format_names",
]
