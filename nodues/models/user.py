"""
User models for the No-Dues application
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StaffUser:
    """Departmental actor acting on clearance stages"""
    id: Optional[str] = None
    name: str = ''
    email: str = ''
    role: str = ''
    department_id: Optional[int] = None
    department_name: str = ''
    school_id: Optional[int] = None

    @property
    def acting_department_id(self) -> Optional[int]:
        """Department identity sent with every decision"""
        return self.department_id or self.school_id

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> 'StaffUser':
        """
        Build an actor from a profile payload or token claims

        Args:
            payload: Profile object or decoded token claims

        Returns:
            StaffUser instance
        """
        payload = payload or {}
        role = payload.get('role') or payload.get('roles') or ''
        if isinstance(role, (list, tuple)):
            role = role[0] if role else ''
        return cls(
            id=_as_str(payload.get('id') or payload.get('user_id') or payload.get('sub')),
            name=str(payload.get('name') or payload.get('full_name') or payload.get('email') or ''),
            email=str(payload.get('email') or ''),
            role=str(role).strip().lower(),
            department_id=_as_int(payload.get('department_id') or payload.get('dept_id')),
            department_name=str(
                payload.get('department_name') or payload.get('department') or payload.get('dept')
                or payload.get('unit') or payload.get('office') or ''
            ),
            school_id=_as_int(payload.get('school_id')),
        )

    def merge(self, other: 'StaffUser') -> 'StaffUser':
        """Fill blank fields from another source; own values take precedence"""
        return StaffUser(
            id=self.id or other.id,
            name=self.name or other.name,
            email=self.email or other.email,
            role=self.role or other.role,
            department_id=self.department_id or other.department_id,
            department_name=self.department_name or other.department_name,
            school_id=self.school_id or other.school_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'department_id': self.department_id,
            'department_name': self.department_name,
            'school_id': self.school_id,
        }


def _as_str(value: Any) -> Optional[str]:
    return str(value) if value is not None and value != '' else None


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None and value != '' else None
    except (TypeError, ValueError):
        return None
