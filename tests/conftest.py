"""
Shared fixtures for the No-Dues test suite
"""
import time

import jwt
import pytest

from nodues import create_app
from nodues.models import SessionContext

TOKEN_KEY = 'nodues-test-signing-key-0123456789abcdef'


def make_token(**claims):
    """Signed token carrying the given claims; expires in an hour by default"""
    payload = {'exp': int(time.time()) + 3600}
    payload.update(claims)
    return jwt.encode(payload, TOKEN_KEY, algorithm='HS256')


class FakeApprovalsClient:
    """In-memory stand-in for ApprovalsClient"""

    def __init__(self, enriched=None, full=None, history=None, details=None):
        self.enriched = enriched if enriched is not None else []
        self.full = full if full is not None else []
        self.history = history if history is not None else []
        self.details = details or {}
        self.decisions = []
        self.decision_error = None
        self.decision_body = {}

    @staticmethod
    def _serve(value):
        if isinstance(value, Exception):
            raise value
        return value

    def list_enriched(self):
        return self._serve(self.enriched)

    def list_full(self):
        return self._serve(self.full)

    def list_history(self):
        return self._serve(self.history)

    def get_enriched(self, application_id):
        return self._serve(self.details.get(application_id, {}))

    def submit_decision(self, stage_id, verb, department_id, remarks):
        self.decisions.append({
            'stage_id': stage_id,
            'verb': verb,
            'department_id': department_id,
            'remarks': remarks,
        })
        if self.decision_error is not None:
            raise self.decision_error
        return self.decision_body


def enriched_item(application_id, name='Asha Verma', roll='23ICS001', status='Pending', **extra):
    item = {
        'application_id': application_id,
        'display_id': f"ND-{application_id}",
        'student_name': name,
        'roll_number': roll,
        'enrollment_number': f"EN{roll}",
        'course': 'B.Tech CSE',
        'student_email': 'student@example.edu',
        'student_mobile': '9999999999',
        'created_at': '2026-02-07T10:30:00',
        'application_status': status,
    }
    item.update(extra)
    return item


def full_item(application_id, stage_id, department='Library', status='Pending', **extra):
    item = {
        'application_id': application_id,
        'active_stage': {
            'stage_id': stage_id,
            'department_name': department,
            'status': status,
        },
    }
    item.update(extra)
    return item


@pytest.fixture
def library_token():
    return make_token(role='library', department_id=2, name='Central Librarian', email='library@example.edu')


@pytest.fixture
def library_session(library_token):
    return SessionContext(token=library_token)


@pytest.fixture
def fake_client():
    return FakeApprovalsClient(
        enriched=[
            enriched_item('A-7', name='Asha Verma', roll='23ICS001'),
            enriched_item('A-8', name='Rohan Das', roll='22ME014'),
        ],
        full=[
            full_item('A-7', 'S-100'),
            full_item('A-8', 'S-101'),
        ],
    )


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    app.extensions['nodues_stores'].clear()


@pytest.fixture
def client(app):
    return app.test_client()
