# /gtin_normalizer/error_pages/handlers.py

# Third-party imports
from flask import Blueprint, current_app, jsonify, request


# Local imports
from gtin_normalizer import log_message

# blueprint router configuration
error_pages = Blueprint("error_pages", __name__)


@error_pages.app_errorhandler(404)
def error_404(error):
    """Error 404 handler"""
    incoming_url = request.path
    current_app.logger.error(log_message(f"404 Error: {error}, URL: {incoming_url}"))
    return jsonify({"ok": False, "message": "Not found"}), 404


@error_pages.app_errorhandler(500)
def error_500(error):
    """Error 500 handler"""
    current_app.logger.error(log_message(getattr(error, "original_exception", None) or error))
    return jsonify({"ok": False, "message": "Internal server error"}), 500
