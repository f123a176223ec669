"""
Domain models initialization
"""

from nodues.models.clearance import (
    PENDING, APPROVED, REJECTED, UNKNOWN,
    Stage, StudentInfo, ClearanceRecord, StageDecision, ActionRecord
)
from nodues.models.user import StaffUser
from nodues.models.session import (
    SESSION_INIT, SESSION_ACTIVE, SESSION_EXPIRED, SessionContext
)

# Export all models
__all__ = [
    'PENDING', 'APPROVED', 'REJECTED', 'UNKNOWN',
    'Stage', 'StudentInfo', 'ClearanceRecord', 'StageDecision', 'ActionRecord',
    'StaffUser',
    'SESSION_INIT', 'SESSION_ACTIVE', 'SESSION_EXPIRED', 'SessionContext'
]
