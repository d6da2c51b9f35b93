"""Helper functions for the application."""
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from flask import current_app, jsonify, request

def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    return jsonify({
        'error': True,
        'message': str(error),
        'status_code': status_code
    }), status_code

def success_response(data: Any = None, message: str = "Success", meta: Dict = None, status_code: int = 200):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data

    if meta is not None:
        response['meta'] = meta

    return jsonify(response), status_code

def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code

def get_pagination() -> Tuple[int, int]:
    """Read page and per_page from the query string, clamped to config."""
    page = request.args.get('page', 1, type=int) or 1
    per_page = request.args.get('per_page', current_app.config.get('DEFAULT_PAGE_SIZE', 10), type=int)
    max_size = current_app.config.get('MAX_PAGE_SIZE', 100)
    return max(page, 1), min(max(per_page or 1, 1), max_size)

def pagination_meta(pagination) -> Dict[str, Any]:
    """Build the meta block for a Flask-SQLAlchemy pagination object."""
    return {
        'page': pagination.page,
        'per_page': pagination.per_page,
        'total': pagination.total,
        'pages': pagination.pages,
        'has_next': pagination.has_next,
        'has_prev': pagination.has_prev
    }

def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount with the configured currency."""
    currency = current_app.config.get('CURRENCY', 'RM')
    return f"{currency} {Decimal(amount or 0):,.2f}"

def format_elapsed(seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
