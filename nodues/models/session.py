"""
Session context shared by every component that needs actor identity
"""

import time
from typing import Any, Callable, Dict, List, Optional

import jwt

from nodues.models.user import StaffUser
from nodues.utils.exceptions import AuthenticationError
from nodues.utils.helpers import log_info, log_warning

SESSION_INIT = 'init'
SESSION_ACTIVE = 'active'
SESSION_EXPIRED = 'expired'

Subscriber = Callable[['SessionContext', str], None]


def decode_claims(token: Optional[str]) -> Dict[str, Any]:
    """
    Read the claims of a bearer token without verifying it

    Tokens are issued and verified by the external auth service; the
    claims are only used for routing and expiry bookkeeping here.
    """
    if not token:
        return {}
    try:
        return jwt.decode(token, options={'verify_signature': False})
    except jwt.InvalidTokenError:
        return {}


class SessionContext:
    """
    Explicit session lifecycle: init -> active -> expired

    Expiry is broadcast once to every subscriber. A context can be
    re-activated with a fresh token after it expired.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[StaffUser] = None,
                 idle_timeout: Optional[int] = None):
        self.state = SESSION_INIT
        self.token: Optional[str] = None
        self.user = StaffUser()
        self.expires_at: Optional[float] = None
        self.last_activity: Optional[float] = None
        self.idle_timeout = idle_timeout
        self.expiry_reason: Optional[str] = None
        self._subscribers: List[Subscriber] = []
        if token:
            self.activate(token, user)

    @property
    def is_active(self) -> bool:
        return self.state == SESSION_ACTIVE

    def activate(self, token: str, user: Optional[StaffUser] = None, now: Optional[float] = None) -> None:
        """
        Adopt an externally issued token

        Args:
            token: Bearer token
            user: Profile returned alongside the token, if any
            now: Current unix time (defaults to time.time())
        """
        if not token:
            raise AuthenticationError("Authentication required")

        claims = decode_claims(token)
        from_claims = StaffUser.from_dict(claims)
        self.user = user.merge(from_claims) if user else from_claims
        self.token = token
        self.expires_at = float(claims['exp']) if isinstance(claims.get('exp'), (int, float)) else None
        self.last_activity = now if now is not None else time.time()
        self.expiry_reason = None
        self.state = SESSION_ACTIVE
        log_info(f"Session activated for role '{self.user.role or 'unknown'}'")

    def touch(self, now: Optional[float] = None) -> None:
        """Record actor activity for the idle timeout"""
        if self.is_active:
            self.last_activity = now if now is not None else time.time()

    def check(self, now: Optional[float] = None) -> StaffUser:
        """
        Ensure the session is usable

        Expires the context when the token lifetime or the idle timeout
        has elapsed.

        Returns:
            The acting user

        Raises:
            AuthenticationError: If the session is not active
        """
        now = now if now is not None else time.time()
        if self.is_active:
            if self.expires_at is not None and now >= self.expires_at:
                self.expire("token expired")
            elif (self.idle_timeout and self.last_activity is not None
                  and now - self.last_activity >= self.idle_timeout):
                self.expire("idle timeout")

        if self.state == SESSION_EXPIRED:
            raise AuthenticationError("Session expired. Please login again.")
        if not self.is_active:
            raise AuthenticationError("Authentication required")
        return self.user

    def expire(self, reason: str = 'expired') -> None:
        """Transition an active session to expired and notify subscribers"""
        if not self.is_active:
            return
        self.state = SESSION_EXPIRED
        self.expiry_reason = reason
        self.token = None
        log_warning(f"Session expired: {reason}")
        for subscriber in list(self._subscribers):
            subscriber(self, reason)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register an expiry listener

        Returns:
            Callable that removes the listener
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, used to keep the context in the Flask session"""
        return {
            'state': self.state,
            'token': self.token,
            'user': self.user.to_dict(),
            'expires_at': self.expires_at,
            'last_activity': self.last_activity,
            'expiry_reason': self.expiry_reason,
        }

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]], idle_timeout: Optional[int] = None) -> 'SessionContext':
        """Restore a context saved with to_dict()"""
        context = cls(idle_timeout=idle_timeout)
        if not payload:
            return context
        context.state = payload.get('state') or SESSION_INIT
        context.token = payload.get('token')
        context.user = StaffUser.from_dict(payload.get('user'))
        context.expires_at = payload.get('expires_at')
        context.last_activity = payload.get('last_activity')
        context.expiry_reason = payload.get('expiry_reason')
        if context.state == SESSION_ACTIVE and not context.token:
            context.state = SESSION_INIT
        return context
