"""GTIN checksum, validation and conversion helpers.

Covers the three retail/shipping formats we accept:

- UPC-12: 12 digits, North American retail.
- EAN-13: 13 digits, international retail.
- ITF-14: 14 digits, case/carton level; the first digit is a packaging indicator.

Everything here is a pure function over digit strings. Soft failures (bad
shape, bad checksum, unknown format) come back as ``False`` or ``None``;
exceptions are reserved for caller bugs and internal invariant violations.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# ----------------------------
# Patterns
# ----------------------------

# [0-9] rather than \d: \d also matches non-ASCII digits.
UPC12_REGEX = re.compile(r"[0-9]{12}")
EAN13_REGEX = re.compile(r"[0-9]{13}")
ITF14_REGEX = re.compile(r"[0-9]{14}")
UPC12_PREFIX_REGEX = re.compile(r"[0-9]{11}")
EAN13_PREFIX_REGEX = re.compile(r"[0-9]{12}")
ITF14_PREFIX_REGEX = re.compile(r"[0-9]{13}")

# (odd-position weight, even-position weight), positions counted from 1
UPC12_WEIGHTS = (3, 1)
EAN13_WEIGHTS = (1, 3)
ITF14_WEIGHTS = (3, 1)

# ----------------------------
# Errors
# ----------------------------


class GTINError(Exception):
    """Base class for gtin_normalizer errors."""


class InvalidPrefixError(GTINError, ValueError):
    """A check digit was requested for a prefix of the wrong length."""


class ConversionInvariantError(GTINError, RuntimeError):
    """Normalization produced an EAN-13 that does not validate.

    This is a defect in the conversion logic, not bad input.
    """


# ----------------------------
# Types
# ----------------------------


class BarcodeFormat(str, enum.Enum):
    UPC12 = "UPC-12"
    EAN13 = "EAN-13"
    ITF14 = "ITF-14"


@dataclass(frozen=True)
class Identification:
    type: BarcodeFormat
    full_form: str


@dataclass(frozen=True)
class Normalization:
    value: Optional[str] = None
    identification: Optional[Identification] = None


# ----------------------------
# Checksums
# ----------------------------


def calculate_check_digit(data: str, weight_odd: int, weight_even: int) -> int:
    """Weighted mod-10 check digit for ``data``.

    Index 0 (the first, "odd" position) is multiplied by ``weight_odd``, index 1
    by ``weight_even``, and so on. An empty string yields 0.
    """
    total = 0
    for i, ch in enumerate(data):
        digit = int(ch)
        total += digit * weight_odd if i % 2 == 0 else digit * weight_even
    return (10 - (total % 10)) % 10


def _check_digit_for(prefix: str, pattern: re.Pattern, length: int, weights: tuple[int, int]) -> int:
    if not validate_barcode(prefix, pattern):
        raise InvalidPrefixError(f"Input must be exactly {length} digits.")
    return calculate_check_digit(prefix, *weights)


def calculate_upc12_check_digit(prefix: str) -> int:
    """Check digit for the first 11 digits of a UPC-12."""
    return _check_digit_for(prefix, UPC12_PREFIX_REGEX, 11, UPC12_WEIGHTS)


def calculate_ean13_check_digit(prefix: str) -> int:
    """Check digit for the first 12 digits of an EAN-13."""
    return _check_digit_for(prefix, EAN13_PREFIX_REGEX, 12, EAN13_WEIGHTS)


def calculate_itf14_check_digit(prefix: str) -> int:
    """Check digit for the first 13 digits of an ITF-14."""
    return _check_digit_for(prefix, ITF14_PREFIX_REGEX, 13, ITF14_WEIGHTS)


# ----------------------------
# Validators
# ----------------------------


def validate_barcode(barcode: str, pattern: re.Pattern | str) -> bool:
    """True when the whole of ``barcode`` matches ``pattern``."""
    if not isinstance(barcode, str):
        return False
    return re.fullmatch(pattern, barcode) is not None


def is_valid_upc12(upc12: str) -> bool:
    if not validate_barcode(upc12, UPC12_REGEX):
        return False
    return int(upc12[11]) == calculate_upc12_check_digit(upc12[:11])


def is_valid_ean13(ean13: str) -> bool:
    if not validate_barcode(ean13, EAN13_REGEX):
        return False
    return int(ean13[12]) == calculate_ean13_check_digit(ean13[:12])


def is_valid_itf14(itf14: str) -> bool:
    if not validate_barcode(itf14, ITF14_REGEX):
        return False
    return int(itf14[13]) == calculate_itf14_check_digit(itf14[:13])


_VALIDATORS = {
    BarcodeFormat.UPC12: is_valid_upc12,
    BarcodeFormat.EAN13: is_valid_ean13,
    BarcodeFormat.ITF14: is_valid_itf14,
}

_PREFIX_CALCULATORS = {
    BarcodeFormat.UPC12: calculate_upc12_check_digit,
    BarcodeFormat.EAN13: calculate_ean13_check_digit,
    BarcodeFormat.ITF14: calculate_itf14_check_digit,
}


def is_valid(barcode: str, barcode_format: BarcodeFormat) -> bool:
    return _VALIDATORS[BarcodeFormat(barcode_format)](barcode)


def check_digit(prefix: str, barcode_format: BarcodeFormat) -> int:
    return _PREFIX_CALCULATORS[BarcodeFormat(barcode_format)](prefix)


# ----------------------------
# Converters
# ----------------------------


def upc12_to_ean13(upc12: str) -> Optional[str]:
    """Prefix a UPC-12 with a zero and recompute the check digit.

    Returns None when ``upc12`` is not a valid UPC-12.
    """
    if not is_valid_upc12(upc12):
        return None

    prefix = "0" + upc12[:11]
    return prefix + str(calculate_ean13_check_digit(prefix))


def itf14_to_ean13(itf14: str) -> Optional[str]:
    """Drop the packaging indicator of an ITF-14 and recompute the check digit.

    Returns None when ``itf14`` is not a valid ITF-14.
    """
    if not is_valid_itf14(itf14):
        return None

    prefix = itf14[1:13]
    return prefix + str(calculate_ean13_check_digit(prefix))


# ----------------------------
# Identification
# ----------------------------


def identify_barcode_type(
    barcode: str,
    exclude_upc12: bool = False,
    exclude_ean13: bool = False,
    exclude_itf14: bool = False,
) -> Optional[Identification]:
    """Work out which format a barcode of unknown length belongs to.

    The trimmed input is left-padded with zeros to 12, 13 and 14 digits and the
    candidates are tried in that order (UPC-12, EAN-13, ITF-14). Padding never
    truncates, so an over-long candidate simply fails validation.
    """
    if not isinstance(barcode, str):
        return None
    barcode = barcode.strip()
    if not barcode:
        return None

    candidates = (
        (BarcodeFormat.UPC12, exclude_upc12, 12),
        (BarcodeFormat.EAN13, exclude_ean13, 13),
        (BarcodeFormat.ITF14, exclude_itf14, 14),
    )
    for barcode_format, excluded, length in candidates:
        if excluded:
            continue
        padded = barcode.rjust(length, "0")
        if _VALIDATORS[barcode_format](padded):
            logger.debug("Identified %r as %s (%s)", barcode, barcode_format.value, padded)
            return Identification(type=barcode_format, full_form=padded)

    logger.debug("Could not identify %r as UPC-12, EAN-13 or ITF-14", barcode)
    return None


# ----------------------------
# Normalization
# ----------------------------


def normalize_with_info(original_gtin: Optional[str], strip_leading_zeroes: bool = False) -> Normalization:
    """Validate ``original_gtin`` and convert it to EAN-13.

    ITF-14 case codes become the EAN-13 of the single item, UPC-12 gains a
    leading zero, EAN-13 passes through. The identification of the input is
    returned alongside the value for auditing.
    """
    if not original_gtin or not isinstance(original_gtin, str):
        return Normalization()

    # Whitespace goes before the zeros so " 00012345678905" reads as UPC-12, not ITF-14.
    info = identify_barcode_type(original_gtin.strip().lstrip("0"))
    if info is None:
        return Normalization()

    if info.type is BarcodeFormat.ITF14:
        fixed = itf14_to_ean13(info.full_form)
    elif info.type is BarcodeFormat.UPC12:
        fixed = upc12_to_ean13(info.full_form)
    else:
        fixed = info.full_form

    if not is_valid_ean13(fixed):
        raise ConversionInvariantError(f"Converted to invalid EAN13: {fixed}")

    if strip_leading_zeroes:
        fixed = fixed.lstrip("0")
    return Normalization(value=fixed, identification=info)


def normalize_as_ean13(original_gtin: Optional[str], strip_leading_zeroes: bool = False) -> Optional[str]:
    """Like :func:`normalize_with_info` but returns only the EAN-13 (or None)."""
    return normalize_with_info(original_gtin, strip_leading_zeroes).value
