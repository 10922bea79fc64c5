from __future__ import annotations

from dataclasses import dataclass

from gtin_normalizer.barcode import BarcodeFormat

_MAX_DIGITS = 14

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BarcodeValidationResult:
	ok: bool
	value: str | None = None
	error: str | None = None


def normalize_barcode(raw: str | None) -> str:
	if not raw:
		return ""
	return "".join(raw.split())


def validate_gtin_input(raw: str | None, field: str = "barcode") -> BarcodeValidationResult:
	value = normalize_barcode(raw)
	if not value:
		return BarcodeValidationResult(ok=False, error=f"Enter a {field}.")
	if not value.isascii() or not value.isdigit():
		return BarcodeValidationResult(ok=False, error=f"The {field} must contain digits only.")

	# UPC-12 (12), EAN-13 (13), ITF-14 (14); shorter values get zero-padded.
	if len(value) > _MAX_DIGITS:
		return BarcodeValidationResult(
			ok=False,
			error=f"The {field} must be at most {_MAX_DIGITS} digits.",
		)

	return BarcodeValidationResult(ok=True, value=value)


def parse_format(raw: str | None) -> BarcodeFormat | None:
	"""Accept 'UPC-12', 'upc12', 'ean_13' and similar spellings."""
	key = "".join(ch for ch in (raw or "").upper() if ch.isalnum())
	for barcode_format in BarcodeFormat:
		if barcode_format.name == key:
			return barcode_format
	return None


def parse_flag(raw: str | None, default: bool = False) -> bool:
	if raw is None or raw.strip() == "":
		return default
	return raw.strip().lower() in _TRUTHY
