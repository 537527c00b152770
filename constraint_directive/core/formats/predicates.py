"""
Default predicate library for string formats.

A PredicateLibrary is a capability record of boolean predicates. The default
record delegates to the ``validators`` and ``phonenumbers`` packages and uses
small, fixed expressions for the shapes neither package checks. Any predicate
can be swapped by building a new record with ``dataclasses.replace``.
"""

import base64
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

import phonenumbers
import validators

from constraint_directive.core.models import CurrencyOptions, DomainNameOptions, EmailOptions


# =======================
# LOCALE ALPHABETS
# =======================

ALPHABETS = {
    "en-US": "A-Z",
    "en-GB": "A-Z",
    "de-DE": "A-ZÄÖÜß",
    "es-ES": "A-ZÁÉÍÑÓÚÜ",
    "fr-FR": "A-ZÀÂÆÇÉÈÊËÏÎÔŒÙÛÜŸ",
    "it-IT": "A-ZÀÉÈÌÎÓÒÙ",
    "nl-NL": "A-ZÁÉËÏÓÖÜÚ",
    "pt-PT": "A-ZÃÁÀÂÄÇÉÊËÍÏÕÓÔÖÚÜ",
    "pt-BR": "A-ZÃÁÀÂÄÇÉÊËÍÏÕÓÔÖÚÜ",
    "ru-RU": "А-ЯЁ",
    "pl-PL": "A-ZĄĆĘŚŁŃÓŻŹ",
    "sv-SE": "A-ZÅÄÖ",
}

POSTAL_CODES = {
    "AU": r"^\d{4}$",
    "BR": r"^\d{5}-?\d{3}$",
    "CA": r"^[ABCEGHJKLMNPRSTVXY]\d[ABCEGHJ-NPRSTV-Z][\s-]?\d[ABCEGHJ-NPRSTV-Z]\d$",
    "DE": r"^\d{5}$",
    "ES": r"^(5[0-2]|[0-4]\d)\d{3}$",
    "FR": r"^\d{2}\s?\d{3}$",
    "GB": r"^(GIR\s?0AA|[A-Z]{1,2}\d[\dA-Z]?\s?\d[A-Z]{2})$",
    "IN": r"^[1-9]\d{5}$",
    "IT": r"^\d{5}$",
    "JP": r"^\d{3}-\d{4}$",
    "NL": r"^\d{4}\s?(?!SA|SD|SS)[A-Z]{2}$",
    "SE": r"^[1-9]\d{2}\s?\d{2}$",
    "SG": r"^\d{6}$",
    "US": r"^\d{5}(-\d{4})?$",
}

# Hex digest length per hash algorithm
HASH_LENGTHS = {
    "md4": 32,
    "md5": 32,
    "sha1": 40,
    "sha224": 56,
    "sha256": 64,
    "sha384": 96,
    "sha512": 128,
    "ripemd128": 32,
    "ripemd160": 40,
    "tiger128": 32,
    "tiger160": 40,
    "tiger192": 48,
    "crc32": 8,
    "crc32b": 8,
}

HASH_VALIDATORS = {
    "md5": validators.md5,
    "sha1": validators.sha1,
    "sha224": validators.sha224,
    "sha256": validators.sha256,
    "sha512": validators.sha512,
}

RFC3339_PATTERN = re.compile(
    r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])[Tt ]"
    r"([01]\d|2[0-3]):[0-5]\d:([0-5]\d|60)(\.\d+)?"
    r"([Zz]|[+-]([01]\d|2[0-3]):[0-5]\d)$"
)
HEX_COLOR_PATTERN = re.compile(r"^#?([0-9A-F]{3}|[0-9A-F]{4}|[0-9A-F]{6}|[0-9A-F]{8})$", re.IGNORECASE)
MONGO_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$", re.IGNORECASE)
MIME_TYPE_PATTERN = re.compile(
    r"^(application|audio|font|image|message|model|multipart|text|video)"
    r"/[a-z0-9.!#$%&'*+^_`{|}~-]+"
    r"(\s*;\s*[a-z0-9-]+=(\"[^\"]*\"|[a-z0-9.+_-]+))*$",
    re.IGNORECASE,
)
MAGNET_URI_PATTERN = re.compile(
    r"^magnet:\?xt(\.1)?=urn:(aich|bitprint|btih|ed2k|ed2khash|kzhash|md5|sha1|tree:tiger)"
    r":[a-z0-9]{32}([a-z0-9]{8})?($|&)",
    re.IGNORECASE,
)
DATA_URI_PATTERN = re.compile(
    r"^data:([a-z]+/[a-z0-9.+-]+(;[a-z0-9-]+=[a-z0-9.+-]+)*)?(;base64)?,"
    r"[a-z0-9!$&',()*+;=\-._~:@/?%\s]*$",
    re.IGNORECASE,
)
DISPLAY_NAME_PATTERN = re.compile(r"^(?P<name>[^<>]+?)\s*<(?P<address>[^<>]+)>$")


def _region(locale: str) -> str:
    """Region part of a locale tag ("en-US" -> "US")."""
    return locale.replace("_", "-").split("-")[-1].upper()


def _alphabet(locale: str) -> str:
    try:
        return ALPHABETS[locale]
    except KeyError:
        raise ValueError(f"Invalid locale '{locale}'")


# =======================
# PREDICATES
# =======================

def is_alpha(value: str, locale: str) -> bool:
    return re.fullmatch(f"[{_alphabet(locale)}]+", value, re.IGNORECASE) is not None


def is_alphanumeric(value: str, locale: str) -> bool:
    return re.fullmatch(f"[0-9{_alphabet(locale)}]+", value, re.IGNORECASE) is not None


def is_ascii(value: str) -> bool:
    return value.isascii()


def is_byte(value: str) -> bool:
    return bool(validators.base64(value))


def is_credit_card(value: str) -> bool:
    return bool(validators.card_number(re.sub(r"[\s-]", "", value)))


def is_currency(value: str, options: CurrencyOptions) -> bool:
    return re.fullmatch(_currency_pattern(options), value) is not None


def is_data_uri(value: str) -> bool:
    if DATA_URI_PATTERN.match(value) is None:
        return False
    header, _, payload = value.partition(",")
    if header.endswith(";base64"):
        try:
            base64.b64decode(payload, validate=True)
        except ValueError:
            return False
    return True


def is_date_time(value: str) -> bool:
    return RFC3339_PATTERN.match(value) is not None


def is_date(value: str) -> bool:
    """ISO 8601 calendar date or date-time."""
    for parse in (date.fromisoformat, datetime.fromisoformat):
        try:
            parse(value)
        except ValueError:
            continue
        return True
    return False


def is_domain_name(value: str, options: DomainNameOptions) -> bool:
    if not options.require_tld and "." not in value.rstrip("."):
        label = r"[a-z0-9_-]+" if options.allow_underscores else r"[a-z0-9-]+"
        return re.fullmatch(label + (r"\.?" if options.allow_trailing_dot else ""), value, re.IGNORECASE) is not None
    if value.endswith(".") and not options.allow_trailing_dot:
        return False
    if "_" in value and not options.allow_underscores:
        return False
    return bool(validators.domain(value, rfc_1034=options.allow_trailing_dot, rfc_2782=options.allow_underscores))


def is_email(value: str, options: EmailOptions) -> bool:
    address = value
    display = DISPLAY_NAME_PATTERN.match(value)
    if display:
        if not options.allow_display_name and not options.require_display_name:
            return False
        address = display.group("address")
    elif options.require_display_name:
        return False

    local, _, domain = address.rpartition("@")
    if not options.allow_utf8_local_part and not local.isascii():
        return False
    if not options.require_tld and "." not in domain:
        address = f"{local}@{domain}.local"

    return bool(validators.email(
        address,
        ipv4_address=options.allow_ip_domain,
        ipv6_address=options.allow_ip_domain,
    ))


def is_hash(value: str, algorithm: str) -> bool:
    check = HASH_VALIDATORS.get(algorithm)
    if check is not None:
        return bool(check(value))
    length = HASH_LENGTHS.get(algorithm)
    if length is None:
        raise ValueError(f"Unknown hash algorithm '{algorithm}'")
    return re.fullmatch(f"[a-f0-9]{{{length}}}", value, re.IGNORECASE) is not None


def is_hex_color(value: str) -> bool:
    return HEX_COLOR_PATTERN.match(value) is not None


def is_ipv4(value: str) -> bool:
    return bool(validators.ipv4(value, cidr=False))


def is_ipv6(value: str) -> bool:
    return bool(validators.ipv6(value, cidr=False))


def is_isbn(value: str) -> bool:
    digits = re.sub(r"[\s-]", "", value)
    if re.fullmatch(r"\d{9}[\dX]", digits):
        total = sum((10 - i) * int(d) for i, d in enumerate(digits[:9]))
        total += 10 if digits[9] == "X" else int(digits[9])
        return total % 11 == 0
    if re.fullmatch(r"\d{13}", digits):
        total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits))
        return total % 10 == 0
    return False


def is_magnet_uri(value: str) -> bool:
    return MAGNET_URI_PATTERN.match(value) is not None


def is_mime_type(value: str) -> bool:
    return MIME_TYPE_PATTERN.match(value) is not None


def is_mobile_phone(value: str, locale: str) -> bool:
    try:
        number = phonenumbers.parse(value, _region(locale))
    except phonenumbers.NumberParseException:
        return False
    if not phonenumbers.is_valid_number(number):
        return False
    return phonenumbers.number_type(number) in (
        phonenumbers.PhoneNumberType.MOBILE,
        phonenumbers.PhoneNumberType.FIXED_LINE_OR_MOBILE,
    )


def is_mongo_id(value: str) -> bool:
    return MONGO_ID_PATTERN.match(value) is not None


def is_postal_code(value: str, country_code: str) -> bool:
    if country_code == "any":
        return any(re.match(p, value, re.IGNORECASE) for p in POSTAL_CODES.values())
    pattern = POSTAL_CODES.get(country_code.upper())
    if pattern is None:
        raise ValueError(f"Invalid country code '{country_code}'")
    return re.match(pattern, value, re.IGNORECASE) is not None


def is_uri(value: str) -> bool:
    return bool(validators.url(value))


def is_uuid(value: str) -> bool:
    return bool(validators.uuid(value))


def _currency_pattern(o: CurrencyOptions) -> str:
    decimals = "|".join(rf"\d{{{n}}}" for n in o.digits_after_decimal)
    thousands = re.escape(o.thousands_separator)
    whole = rf"(0|[1-9]\d{{0,2}}({thousands}\d{{3}})*|[1-9]\d*)"

    amount = whole
    if o.allow_decimal or o.require_decimal:
        fraction = rf"({re.escape(o.decimal_separator)}({decimals}))"
        amount += fraction if o.require_decimal else fraction + "?"

    if o.allow_negatives and not o.parens_for_negatives:
        if o.negative_sign_after_digits:
            amount += "-?"
        elif o.negative_sign_before_digits:
            amount = "-?" + amount

    symbol = f"({re.escape(o.symbol)})" + ("" if o.require_symbol else "?")
    if o.symbol_after_digits:
        pattern = amount + (" ?" if o.allow_space_after_digits else "") + symbol
    else:
        pattern = symbol + (" ?" if o.allow_space_after_symbol else "") + amount

    if o.allow_negatives:
        if o.parens_for_negatives:
            pattern = rf"(\({pattern}\)|{pattern})"
        elif not (o.negative_sign_before_digits or o.negative_sign_after_digits):
            pattern = "-?" + pattern
    return pattern


@dataclass(frozen=True)
class PredicateLibrary:
    """
    Named predicates used by the format checks.

    Each field is a callable returning True when the value has the shape.
    Predicates may raise for input they cannot handle; the caller treats
    that as a failed format.
    """

    is_alpha: Callable[[str, str], bool] = is_alpha
    is_alphanumeric: Callable[[str, str], bool] = is_alphanumeric
    is_ascii: Callable[[str], bool] = is_ascii
    is_byte: Callable[[str], bool] = is_byte
    is_credit_card: Callable[[str], bool] = is_credit_card
    is_currency: Callable[[str, CurrencyOptions], bool] = is_currency
    is_data_uri: Callable[[str], bool] = is_data_uri
    is_date_time: Callable[[str], bool] = is_date_time
    is_date: Callable[[str], bool] = is_date
    is_domain_name: Callable[[str, DomainNameOptions], bool] = is_domain_name
    is_email: Callable[[str, EmailOptions], bool] = is_email
    is_hash: Callable[[str, str], bool] = is_hash
    is_hex_color: Callable[[str], bool] = is_hex_color
    is_ipv4: Callable[[str], bool] = is_ipv4
    is_ipv6: Callable[[str], bool] = is_ipv6
    is_isbn: Callable[[str], bool] = is_isbn
    is_magnet_uri: Callable[[str], bool] = is_magnet_uri
    is_mime_type: Callable[[str], bool] = is_mime_type
    is_mobile_phone: Callable[[str, str], bool] = is_mobile_phone
    is_mongo_id: Callable[[str], bool] = is_mongo_id
    is_postal_code: Callable[[str, str], bool] = is_postal_code
    is_uri: Callable[[str], bool] = is_uri
    is_uuid: Callable[[str], bool] = is_uuid


DEFAULT_PREDICATES = PredicateLibrary()
