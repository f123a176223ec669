"""
Role to department scope resolution
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

ACCESS_ALL = 'all'
ACCESS_DEPARTMENT = 'department'
ACCESS_NONE = 'none'

GENERIC_SCOPE = 'dashboard'

# Role string -> landing scope, including legacy department names
ROLE_SCOPES = {
    'admin': 'admin',
    'super_admin': 'admin',
    'library': 'library',
    'sports': 'sports',
    'hostel': 'hostels',
    'hostels': 'hostels',
    'dean': 'school',
    'school': 'school',
    'accounts': 'accounts',
    'account': 'accounts',
    'laboratory': 'laboratories',
    'laboratories': 'laboratories',
    'lab': 'laboratories',
    'crc': 'crc',
    'office': 'office',
    'exam': 'exam',
    'hod': 'hod',
}

ADMIN_SCOPES = frozenset({'admin'})

# Department ids as seeded by the approvals service
DEPARTMENT_ID_SCOPES = {
    1: GENERIC_SCOPE,
    2: 'library',
    3: 'hostels',
    4: 'accounts',
    5: 'sports',
    6: 'exam',
}

# Substring -> scope, checked in order against free-form department names; more specific first
DEPARTMENT_KEYWORDS = (
    ('hostel', 'hostels'),
    ('account', 'accounts'),
    ('sport', 'sports'),
    ('exam', 'exam'),
    ('library', 'library'),
    ('crc', 'crc'),
    ('laborator', 'laboratories'),
    ('lab', 'laboratories'),
    ('dean', 'school'),
    ('school', 'school'),
    ('office', 'office'),
    ('hod', 'hod'),
)

_SEPARATORS = re.compile(r'[\s\-]+')


@dataclass(frozen=True)
class RouteScope:
    """
    What an actor may see and act on

    Attributes:
        scope: Landing scope name (`/<scope>/dashboard`)
        department_code: Canonical department whose stages are visible, None for admin and no-access
        access: 'all', 'department' or 'none'
    """
    scope: str
    department_code: Optional[str]
    access: str

    @property
    def landing_path(self) -> str:
        return f"/{self.scope}/dashboard"

    @property
    def can_act(self) -> bool:
        return self.access == ACCESS_DEPARTMENT

    def includes(self, department: Optional[str]) -> bool:
        """
        Whether a stage owned by `department` is visible in this scope

        Stages without a department are trusted to be pre-scoped by
        the approvals service.
        """
        if self.access == ACCESS_ALL:
            return True
        if self.access == ACCESS_NONE:
            return False
        if department is None or not str(department).strip():
            return True
        return canonical_department(department) == self.department_code


def _role_key(value: Any) -> str:
    return _SEPARATORS.sub('_', str(value or '').strip().lower())


def canonical_department(name: Any) -> Optional[str]:
    """
    Canonical department code for a department name or alias

    Args:
        name: e.g. "Account", "Hostels", "Central Library"

    Returns:
        Department code, or None when the name is not recognized
    """
    key = _role_key(name)
    if not key:
        return None
    scope = ROLE_SCOPES.get(key)
    if scope and scope not in ADMIN_SCOPES:
        return scope
    compact = key.replace('_', '')
    for keyword, scope in DEPARTMENT_KEYWORDS:
        if keyword in compact:
            return scope
    return None


def _department_scope(scope: str) -> RouteScope:
    if scope in ADMIN_SCOPES:
        return RouteScope(scope=scope, department_code=None, access=ACCESS_ALL)
    if scope == GENERIC_SCOPE:
        return RouteScope(scope=scope, department_code=None, access=ACCESS_NONE)
    return RouteScope(scope=scope, department_code=scope, access=ACCESS_DEPARTMENT)


def resolve_role(role: Any, department_name: Any = None, department_id: Any = None) -> RouteScope:
    """
    Resolve an actor's role to its route scope

    Alias roles resolve to the same scope as their canonical name.
    A generic 'staff' role is resolved by department id, then by
    department name. Unknown roles get a no-access scope named after
    the role itself.

    Args:
        role: Role string from the profile or token
        department_name: Department name, used for staff accounts
        department_id: Numeric department id, used for staff accounts

    Returns:
        RouteScope
    """
    key = _role_key(role)
    if not key:
        return RouteScope(scope=GENERIC_SCOPE, department_code=None, access=ACCESS_NONE)

    if key in ROLE_SCOPES:
        return _department_scope(ROLE_SCOPES[key])

    if 'admin' in key:
        return _department_scope('admin')

    if 'staff' in key:
        try:
            by_id = DEPARTMENT_ID_SCOPES.get(int(department_id)) if department_id is not None else None
        except (TypeError, ValueError):
            by_id = None
        if by_id:
            return _department_scope(by_id)
        by_name = canonical_department(department_name)
        return _department_scope(by_name or GENERIC_SCOPE)

    return RouteScope(scope=key, department_code=None, access=ACCESS_NONE)


def resolve_user(user) -> RouteScope:
    """Resolve the scope of a StaffUser"""
    return resolve_role(user.role, user.department_name, user.department_id)
