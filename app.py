# /app.py

from gtin_normalizer import barcode, create_app

app = create_app()


@app.shell_context_processor
def make_shell_context():
    """Create a shell context for the application -
    for trying out the GTIN helpers in the Flask shell"""
    return {
        "barcode": barcode,
        "BarcodeFormat": barcode.BarcodeFormat,
        "identify": barcode.identify_barcode_type,
        "normalize": barcode.normalize_as_ean13,
    }
