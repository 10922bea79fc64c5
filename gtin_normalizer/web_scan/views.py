from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from gtin_normalizer import barcode, get_version, log_message
from gtin_normalizer.barcode import BarcodeFormat, InvalidPrefixError
from gtin_normalizer.web_scan.forms import parse_flag, parse_format, validate_gtin_input

# blueprint router configuration
web_scan = Blueprint("web_scan", __name__)

_CONVERTERS = {
    BarcodeFormat.UPC12: barcode.upc12_to_ean13,
    BarcodeFormat.ITF14: barcode.itf14_to_ean13,
}


def _fail(message: str, status: int = 200, **extra):
    return jsonify({"ok": False, "message": message, **extra}), status


def _format_arg(allowed=tuple(BarcodeFormat)) -> BarcodeFormat | None:
    barcode_format = parse_format(request.values.get("format"))
    if barcode_format not in allowed:
        return None
    return barcode_format


def _format_names(allowed) -> str:
    return ", ".join(f.value for f in allowed)


@web_scan.route("/", methods=["GET"])
def index():
    """Service name and version"""
    return jsonify({"service": "gtin-normalizer", "version": get_version()})


@web_scan.route("/validate", methods=["GET", "POST"])
def validate():
    validation = validate_gtin_input(request.values.get("barcode"))
    if not validation.ok:
        return _fail(validation.error)

    barcode_format = _format_arg()
    if barcode_format is None:
        return _fail(f"Format must be one of {_format_names(BarcodeFormat)}.")

    valid = barcode.is_valid(validation.value, barcode_format)
    return jsonify(
        {"ok": True, "format": barcode_format.value, "barcode": validation.value, "valid": valid}
    )


@web_scan.route("/check-digit", methods=["GET", "POST"])
def check_digit():
    validation = validate_gtin_input(request.values.get("prefix"), field="prefix")
    if not validation.ok:
        return _fail(validation.error)

    barcode_format = _format_arg()
    if barcode_format is None:
        return _fail(f"Format must be one of {_format_names(BarcodeFormat)}.")

    try:
        digit = barcode.check_digit(validation.value, barcode_format)
    except InvalidPrefixError as e:
        current_app.logger.info(log_message(f"Rejected {barcode_format.value} prefix {validation.value}: {e}"))
        return _fail(str(e), status=400)

    return jsonify(
        {"ok": True, "format": barcode_format.value, "prefix": validation.value, "check_digit": digit}
    )


@web_scan.route("/convert", methods=["GET", "POST"])
def convert():
    validation = validate_gtin_input(request.values.get("barcode"))
    if not validation.ok:
        return _fail(validation.error)

    barcode_format = _format_arg(allowed=tuple(_CONVERTERS))
    if barcode_format is None:
        return _fail(f"Format must be one of {_format_names(_CONVERTERS)}.")

    ean13 = _CONVERTERS[barcode_format](validation.value)
    if ean13 is None:
        return _fail(f"Not a valid {barcode_format.value}: {validation.value}")

    return jsonify({"ok": True, "format": barcode_format.value, "barcode": validation.value, "ean13": ean13})


@web_scan.route("/identify", methods=["GET", "POST"])
def identify():
    validation = validate_gtin_input(request.values.get("barcode"))
    if not validation.ok:
        return _fail(validation.error)

    info = barcode.identify_barcode_type(
        validation.value,
        exclude_upc12=parse_flag(request.values.get("exclude_upc12")),
        exclude_ean13=parse_flag(request.values.get("exclude_ean13")),
        exclude_itf14=parse_flag(request.values.get("exclude_itf14")),
    )
    if info is None:
        return _fail(f"Not a UPC-12, EAN-13 or ITF-14: {validation.value}")

    return jsonify({"ok": True, "type": info.type.value, "full_form": info.full_form})


@web_scan.route("/normalize", methods=["GET", "POST"])
def normalize():
    validation = validate_gtin_input(request.values.get("barcode"))
    if not validation.ok:
        return _fail(validation.error)

    strip = parse_flag(
        request.values.get("strip_leading_zeroes"),
        default=current_app.config["GTIN_STRIP_LEADING_ZEROES"],
    )
    result = barcode.normalize_with_info(validation.value, strip_leading_zeroes=strip)
    if result.value is None:
        current_app.logger.info(log_message(f"Could not normalize {validation.value}"))
        return _fail(f"Not a UPC-12, EAN-13 or ITF-14: {validation.value}")

    info = result.identification
    current_app.logger.info(
        log_message(f"Normalized {validation.value} ({info.type.value} {info.full_form}) -> {result.value}")
    )
    return jsonify(
        {"ok": True, "ean13": result.value, "type": info.type.value, "full_form": info.full_form}
    )
