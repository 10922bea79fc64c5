# /gtin_normalizer/cli.py

# Third-party imports
import click
from flask import current_app
from flask.cli import with_appcontext

# Local imports
from gtin_normalizer.barcode import normalize_with_info


@click.command("gtin-check")
@click.argument("barcodes", nargs=-1, required=True)
@click.option(
    "--strip-leading-zeroes/--keep-leading-zeroes",
    default=None,
    help="Trim leading 0's from the normalized EAN-13 (default: GTIN_STRIP_LEADING_ZEROES).",
)
@with_appcontext
def gtin_check(barcodes, strip_leading_zeroes):
    """Identify each BARCODE and print its normalized EAN-13."""
    if strip_leading_zeroes is None:
        strip_leading_zeroes = current_app.config["GTIN_STRIP_LEADING_ZEROES"]

    unrecognized = 0
    for code in barcodes:
        result = normalize_with_info(code, strip_leading_zeroes=strip_leading_zeroes)
        if result.value is None:
            click.echo(f"{code}: not a valid UPC-12, EAN-13 or ITF-14.")
            unrecognized += 1
            continue

        info = result.identification
        click.echo(f"{code}: identified as {info.type.value}, full form {info.full_form}")
        click.echo(f"{code}: EAN-13 {result.value}")

    current_app.logger.info(f"gtin-check: {len(barcodes)} barcode(s), {unrecognized} unrecognized")
    if unrecognized:
        raise SystemExit(1)
