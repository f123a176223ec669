"""Tests for role to scope resolution."""

import pytest

from nodues.models import StaffUser
from nodues.services.role_route_resolver import (
    canonical_department,
    resolve_role,
    resolve_user,
)


@pytest.mark.parametrize('alias, canonical', [
    ('account', 'accounts'),
    ('hostel', 'hostels'),
    ('lab', 'laboratories'),
    ('laboratory', 'laboratories'),
    ('dean', 'school'),
    ('super_admin', 'admin'),
])
def test_aliases_resolve_like_canonical_role(alias, canonical):
    assert resolve_role(alias) == resolve_role(canonical)


def test_department_role():
    scope = resolve_role('Library')

    assert scope.scope == 'library'
    assert scope.department_code == 'library'
    assert scope.landing_path == '/library/dashboard'
    assert scope.can_act


def test_admin_sees_everything_but_cannot_act():
    scope = resolve_role('admin')

    assert scope.includes('Hostel')
    assert scope.includes('Library')
    assert not scope.can_act


def test_role_containing_admin():
    assert resolve_role('system admin').scope == 'admin'


def test_unknown_role_gets_no_access_scope():
    scope = resolve_role('Alumni Cell')

    assert scope.scope == 'alumni_cell'
    assert scope.landing_path == '/alumni_cell/dashboard'
    assert not scope.can_act
    assert not scope.includes('Library')


def test_empty_role():
    scope = resolve_role(None)

    assert scope.scope == 'dashboard'
    assert not scope.can_act


def test_staff_resolved_by_department_id():
    assert resolve_role('staff', department_id=3).scope == 'hostels'
    assert resolve_role('staff', department_id='2').scope == 'library'


def test_staff_resolved_by_department_name():
    assert resolve_role('staff', department_name='Boys Hostel No. 2').scope == 'hostels'
    assert resolve_role('staff', department_name='Accounts Section').scope == 'accounts'


def test_staff_without_department_has_no_access():
    scope = resolve_role('staff')

    assert scope.scope == 'dashboard'
    assert not scope.can_act


def test_department_scope_includes_only_own_department():
    scope = resolve_role('accounts')

    assert scope.includes('Account')
    assert scope.includes('Accounts')
    assert not scope.includes('Library')
    assert scope.includes('')


@pytest.mark.parametrize('name, code', [
    ('Central Library', 'library'),
    ('Hostels', 'hostels'),
    ('Computer Laboratory', 'laboratories'),
    ('Examination Cell', 'exam'),
    ('Registry', None),
    ('', None),
])
def test_canonical_department(name, code):
    assert canonical_department(name) == code


def test_resolve_user():
    user = StaffUser(role='staff', department_name='Sports Complex')

    assert resolve_user(user).scope == 'sports'


def test_staff_in_lab_resolves_to_laboratories():
    scope = resolve_role('staff', department_name='Computer Lab')

    assert scope.scope == 'laboratories'
    assert scope.can_act


def test_laboratories_scope_includes_short_lab_names():
    scope = resolve_role('lab')

    assert scope.includes('Physics Lab')
    assert scope.includes('Chemistry Laboratory')
    assert not scope.includes('Central Library')


def test_dean_office_belongs_to_school():
    assert canonical_department("Dean's Office") == 'school'
    assert resolve_role('dean').includes("Dean's Office")
    assert canonical_department('Registrar Office') == 'office'
