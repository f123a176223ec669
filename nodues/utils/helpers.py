"""
Helper utilities
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Iterable
from flask import current_app, has_app_context

_fallback_logger = logging.getLogger('nodues')


def setup_logging() -> None:
    """Setup application logging"""
    if not current_app.debug:
        # Production logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )
    else:
        # Development logging
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )


def _logger() -> logging.Logger:
    return current_app.logger if has_app_context() else _fallback_logger


def log_error(message: str, exception: Optional[Exception] = None) -> None:
    """
    Log error message

    Args:
        message: Error message
        exception: Exception object
    """
    if exception:
        _logger().error(f"{message}: {str(exception)}")
    else:
        _logger().error(message)


def log_warning(message: str) -> None:
    """
    Log warning message

    Args:
        message: Warning message
    """
    _logger().warning(message)


def log_info(message: str) -> None:
    """
    Log info message

    Args:
        message: Info message
    """
    _logger().info(message)


def first_present(record: Dict[str, Any], keys: Iterable[str], default: Any = '') -> Any:
    """
    Return the first non-empty value found under any of the given keys

    Args:
        record: Source mapping
        keys: Candidate field names, in precedence order
        default: Value returned when none of the keys holds a value
    """
    for key in keys:
        value = record.get(key)
        if value is not None and value != '':
            return value
    return default


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the approvals service

    Naive timestamps are read as UTC.

    Returns:
        Timezone-aware datetime, or None if value is empty or unparseable
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def create_response(success: bool, message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """
    Create standardized API response

    Args:
        success: Whether operation was successful
        message: Response message
        data: Optional data to include

    Returns:
        Standardized response dictionary
    """
    response = {
        'ok': success,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return response
