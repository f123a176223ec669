"""Tests for the session lifecycle."""

import pytest

from nodues.models import SESSION_ACTIVE, SESSION_EXPIRED, SESSION_INIT, SessionContext, StaffUser
from nodues.models.session import decode_claims
from nodues.utils.exceptions import AuthenticationError

from tests.conftest import make_token


def test_starts_in_init_state():
    context = SessionContext()

    assert context.state == SESSION_INIT
    with pytest.raises(AuthenticationError, match='Authentication required'):
        context.check()


def test_activate_reads_claims(library_token):
    context = SessionContext()
    context.activate(library_token)

    assert context.state == SESSION_ACTIVE
    assert context.user.role == 'library'
    assert context.user.department_id == 2
    assert context.expires_at is not None
    assert context.check().name == 'Central Librarian'


def test_profile_takes_precedence_over_claims(library_token):
    context = SessionContext(token=library_token, user=StaffUser(name='Dr. Sen', role='Library'))

    assert context.user.name == 'Dr. Sen'
    assert context.user.department_id == 2


def test_activate_requires_token():
    with pytest.raises(AuthenticationError):
        SessionContext().activate('')


def test_undecodable_token_still_activates():
    context = SessionContext(token='not-a-jwt')

    assert context.is_active
    assert context.expires_at is None
    assert decode_claims('not-a-jwt') == {}


def test_token_expiry():
    context = SessionContext(token=make_token(role='library', exp=1000))

    with pytest.raises(AuthenticationError, match='Session expired'):
        context.check(now=1000)
    assert context.state == SESSION_EXPIRED
    assert context.token is None
    assert context.expiry_reason == 'token expired'


def test_idle_timeout(library_token):
    context = SessionContext(idle_timeout=60)
    context.activate(library_token, now=100)

    context.check(now=150)
    with pytest.raises(AuthenticationError):
        context.check(now=160)
    assert context.expiry_reason == 'idle timeout'


def test_touch_extends_idle_window(library_token):
    context = SessionContext(idle_timeout=60)
    context.activate(library_token, now=100)

    context.touch(now=150)

    assert context.check(now=200).role == 'library'


def test_expiry_is_broadcast_once(library_session):
    seen = []
    library_session.subscribe(lambda ctx, reason: seen.append(reason))

    library_session.expire('Token has expired')
    library_session.expire('again')

    assert seen == ['Token has expired']


def test_unsubscribe(library_session):
    seen = []
    unsubscribe = library_session.subscribe(lambda ctx, reason: seen.append(reason))

    unsubscribe()
    library_session.expire()

    assert seen == []


def test_reactivate_after_expiry(library_session, library_token):
    library_session.expire()
    library_session.activate(library_token)

    assert library_session.is_active
    assert library_session.expiry_reason is None


def test_round_trip_through_dict(library_session):
    restored = SessionContext.from_dict(library_session.to_dict(), idle_timeout=30)

    assert restored.is_active
    assert restored.token == library_session.token
    assert restored.user == library_session.user
    assert restored.idle_timeout == 30


def test_expired_state_is_restored(library_session):
    library_session.expire('idle timeout')

    restored = SessionContext.from_dict(library_session.to_dict())

    assert restored.state == SESSION_EXPIRED
    with pytest.raises(AuthenticationError, match='Session expired'):
        restored.check()


def test_restore_from_empty_payload():
    assert SessionContext.from_dict(None).state == SESSION_INIT
