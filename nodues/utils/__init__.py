"""
Utilities package initialization
"""

from nodues.utils.exceptions import (
    NoDuesException, ValidationError, AuthenticationError,
    AuthorizationError, SubmissionError, ReconciliationDegraded
)
from nodues.utils.validators import (
    validate_required, validate_action, validate_remark,
    validate_stage_id, validate_page
)
from nodues.utils.helpers import (
    setup_logging, log_error, log_warning, log_info,
    first_present, parse_timestamp, create_response
)

__all__ = [
    'NoDuesException', 'ValidationError', 'AuthenticationError',
    'AuthorizationError', 'SubmissionError', 'ReconciliationDegraded',
    'validate_required', 'validate_action', 'validate_remark',
    'validate_stage_id', 'validate_page',
    'setup_logging', 'log_error', 'log_warning', 'log_info',
    'first_present', 'parse_timestamp', 'create_response'
]
