"""
Session service: binds the session context to the Flask session
"""

import time
import uuid
from typing import Any, Dict, Optional

from flask import current_app, session

from nodues.models.session import SessionContext
from nodues.models.user import StaffUser
from nodues.services.approvals_client import ApprovalsClient
from nodues.services.record_store import RecordStore
from nodues.services.review_service import DepartmentReviewService
from nodues.services.role_route_resolver import RouteScope, resolve_user
from nodues.utils.exceptions import AuthenticationError
from nodues.utils.helpers import log_info

SESSION_KEY = 'nodues_session'
SESSION_ID_KEY = 'sid'
STORES_EXTENSION = 'nodues_stores'


class SessionService:
    """Session service class"""

    @staticmethod
    def _stores() -> Dict[str, RecordStore]:
        return current_app.extensions.setdefault(STORES_EXTENSION, {})

    @staticmethod
    def _drop_store(session_id: Optional[str]) -> None:
        if session_id:
            SessionService._stores().pop(session_id, None)

    @staticmethod
    def _store_max_age() -> float:
        idle_timeout = current_app.config.get('SESSION_IDLE_TIMEOUT')
        if idle_timeout:
            return float(idle_timeout)
        return current_app.permanent_session_lifetime.total_seconds()

    @staticmethod
    def evict_stale_stores(now: Optional[float] = None) -> int:
        """
        Drop record stores of sessions that have gone quiet

        A store unused for longer than the idle timeout (or the
        session lifetime when no idle timeout is set) belongs to an
        abandoned or expired session.

        Returns:
            Number of stores removed
        """
        now = now if now is not None else time.time()
        max_age = SessionService._store_max_age()
        stores = SessionService._stores()
        stale = [sid for sid, store in stores.items() if now - store.last_used >= max_age]
        for session_id in stale:
            del stores[session_id]
        if stale:
            log_info(f"Evicted {len(stale)} idle record store(s)")
        return len(stale)

    @staticmethod
    def current_context() -> SessionContext:
        """
        Session context of the current request

        Expiry drops the session's in-memory record set.
        """
        context = SessionContext.from_dict(
            session.get(SESSION_KEY),
            idle_timeout=current_app.config.get('SESSION_IDLE_TIMEOUT')
        )
        session_id = session.get(SESSION_ID_KEY)
        context.subscribe(lambda ctx, reason: SessionService._drop_store(session_id))
        return context

    @staticmethod
    def save(context: SessionContext) -> None:
        """Persist the context back into the Flask session"""
        session[SESSION_KEY] = context.to_dict()

    @staticmethod
    def start_session(token: str, profile: Optional[Dict[str, Any]] = None) -> RouteScope:
        """
        Adopt an externally issued token for this browser session

        Args:
            token: Bearer token from the auth service
            profile: Optional user profile returned with the token

        Returns:
            The actor's route scope
        """
        if not token or not isinstance(token, str):
            raise AuthenticationError("Authentication required")

        SessionService._drop_store(session.get(SESSION_ID_KEY))
        context = SessionContext(idle_timeout=current_app.config.get('SESSION_IDLE_TIMEOUT'))
        context.activate(token, StaffUser.from_dict(profile) if profile else None)

        session.clear()
        session[SESSION_ID_KEY] = uuid.uuid4().hex
        session.permanent = True
        SessionService.save(context)
        return resolve_user(context.user)

    @staticmethod
    def end_session() -> bool:
        """Logout current user"""
        SessionService._drop_store(session.get(SESSION_ID_KEY))
        session.clear()
        log_info("Session closed")
        return True

    @staticmethod
    def review_service(context: SessionContext) -> DepartmentReviewService:
        """Review workflow bound to the context and its record store"""
        session_id = session.get(SESSION_ID_KEY)
        if not session_id:
            raise AuthenticationError("Authentication required")

        SessionService.evict_stale_stores()
        store = SessionService._stores().setdefault(session_id, RecordStore())
        store.mark_used()
        client = ApprovalsClient(
            current_app.config['APPROVALS_API_BASE'],
            context,
            timeout=current_app.config.get('APPROVALS_API_TIMEOUT', 15)
        )
        return DepartmentReviewService(
            client,
            context,
            store=store,
            history_page_size=current_app.config.get('HISTORY_PAGE_SIZE', 6)
        )
