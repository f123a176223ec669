"""Tests for model parsing and input validators."""

import pytest

from nodues.models import Stage, StaffUser
from nodues.utils.exceptions import ValidationError
from nodues.utils.helpers import first_present, parse_timestamp
from nodues.utils.validators import validate_action, validate_page, validate_remark, validate_stage_id


class TestStage:

    def test_from_dict_alternate_keys(self):
        stage = Stage.from_dict({
            'id': 17,
            'department': 'Hostel',
            'status': 'Rejected',
            'remark': 'Room damage',
            'reviewed_by': 'Warden',
            'reviewed_at': '2026-01-05T12:00:00',
        })

        assert stage.stage_id == '17'
        assert stage.department == 'Hostel'
        assert stage.remark == 'Room damage'
        assert stage.actioned_by == 'Warden'
        assert stage.actioned_at.year == 2026

    def test_keeps_raw_status_label(self):
        assert Stage.from_dict({'stage_id': 'S-1', 'status': 'cleared'}).status == 'cleared'
        assert Stage.from_dict({'stage_id': 'S-1'}).status == 'Pending'


class TestStaffUser:

    def test_from_claims(self):
        user = StaffUser.from_dict({'sub': 9, 'roles': ['Accounts'], 'dept_id': '4', 'email': 'a@x.edu'})

        assert user.id == '9'
        assert user.role == 'accounts'
        assert user.department_id == 4
        assert user.name == 'a@x.edu'

    def test_acting_department_falls_back_to_school(self):
        assert StaffUser(school_id=3).acting_department_id == 3
        assert StaffUser(department_id=2, school_id=3).acting_department_id == 2


class TestValidators:

    def test_action(self):
        assert validate_action(' Approve ') == 'approve'
        with pytest.raises(ValidationError):
            validate_action(None)

    def test_remark_optional_for_approve(self):
        assert validate_remark('approve', '   ') is None
        assert validate_remark('approve', ' ok ') == 'ok'

    def test_stage_id(self):
        assert validate_stage_id(0) == '0'
        with pytest.raises(ValidationError, match='missing stage'):
            validate_stage_id(' ')

    @pytest.mark.parametrize('page', ['0', '-1', 'x', None])
    def test_invalid_page(self, page):
        with pytest.raises(ValidationError):
            validate_page(page)


def test_first_present_skips_blank_values():
    assert first_present({'a': '', 'b': None, 'c': 'x'}, ('a', 'b', 'c')) == 'x'
    assert first_present({}, ('a',), 'fallback') == 'fallback'


def test_parse_timestamp():
    assert parse_timestamp('2026-02-07T10:30:00Z').utcoffset().total_seconds() == 0
    assert parse_timestamp('yesterday') is None
    assert parse_timestamp(None) is None
