"""
Clearance application and stage models
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from nodues.utils.helpers import first_present, parse_timestamp

# Canonical status categories
PENDING = 'Pending'
APPROVED = 'Approved'
REJECTED = 'Rejected'
UNKNOWN = 'Unknown'


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Stage:
    """One department's clearance checkpoint for one application"""
    stage_id: Optional[str]
    department: Optional[str] = None
    status: str = PENDING
    remark: Optional[str] = None
    actioned_by: Optional[str] = None
    actioned_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Stage':
        """Build a stage from an approvals service payload"""
        stage_id = first_present(payload, ('stage_id', 'id'), None)
        return cls(
            stage_id=str(stage_id).strip() if stage_id is not None else None,
            department=first_present(payload, ('department_name', 'department', 'department_code', 'school_name'), None),
            status=first_present(payload, ('status',), PENDING),
            remark=first_present(payload, ('remarks', 'remark'), None),
            actioned_by=first_present(payload, ('actioned_by', 'reviewed_by', 'reviewer_id'), None),
            actioned_at=parse_timestamp(first_present(payload, ('actioned_at', 'reviewed_at'), None)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'stage_id': self.stage_id,
            'department': self.department,
            'status': self.status,
            'remark': self.remark,
            'actioned_by': self.actioned_by,
            'actioned_at': _isoformat(self.actioned_at),
        }


@dataclass
class StudentInfo:
    """Denormalized student identity shown alongside an application"""
    name: str = ''
    roll_number: str = ''
    enrollment_number: str = ''
    course: str = ''
    email: str = ''
    mobile: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'roll_number': self.roll_number,
            'enrollment_number': self.enrollment_number,
            'course': self.course,
            'email': self.email,
            'mobile': self.mobile,
        }


@dataclass
class ClearanceRecord:
    """
    Canonical per-application view produced by reconciliation

    `status` is the raw label from the service; `category` is its
    classified form. `active_stage` is None when no stage could be
    attached, in which case the record is shown but not actionable.
    """
    application_id: str
    student: StudentInfo = field(default_factory=StudentInfo)
    display_id: Optional[str] = None
    school: str = ''
    submitted_at: Optional[datetime] = None
    status: str = PENDING
    category: str = PENDING
    active_stage: Optional[Stage] = None
    overall_status: Optional[str] = None

    @property
    def stage_id(self) -> Optional[str]:
        return self.active_stage.stage_id if self.active_stage else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'application_id': self.application_id,
            'display_id': self.display_id,
            'student': self.student.to_dict(),
            'school': self.school,
            'submitted_at': _isoformat(self.submitted_at),
            'status': self.status,
            'category': self.category,
            'active_stage': self.active_stage.to_dict() if self.active_stage else None,
            'overall_status': self.overall_status,
        }


@dataclass(frozen=True)
class StageDecision:
    """Outcome of a decision accepted by the approvals service"""
    application_id: str
    stage_id: str
    action: str
    status: str
    remark: Optional[str]
    actioned_by: Optional[str]
    actioned_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'application_id': self.application_id,
            'stage_id': self.stage_id,
            'action': self.action,
            'status': self.status,
            'remark': self.remark,
            'actioned_by': self.actioned_by,
            'actioned_at': _isoformat(self.actioned_at),
        }


@dataclass(frozen=True)
class ActionRecord:
    """Immutable audit entry, one per stage decision"""
    student_name: str
    display_id: str
    roll_number: str
    action: str
    remarks: Optional[str]
    timestamp: Optional[datetime]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'ActionRecord':
        """Build an audit entry from a history feed item"""
        return cls(
            student_name=str(payload.get('student_name') or ''),
            display_id=str(payload.get('display_id') or ''),
            roll_number=str(payload.get('roll_number') or ''),
            action=str(payload.get('action') or ''),
            remarks=payload.get('remarks') or None,
            timestamp=parse_timestamp(payload.get('timestamp')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'student_name': self.student_name,
            'display_id': self.display_id,
            'roll_number': self.roll_number,
            'action': self.action,
            'remarks': self.remarks,
            'timestamp': _isoformat(self.timestamp),
        }
