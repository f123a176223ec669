"""
Department review workflow: scope, reconcile, filter, act
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

import requests

from nodues.models.clearance import ClearanceRecord, Stage, StageDecision
from nodues.models.session import SessionContext
from nodues.services.history_service import DEFAULT_PAGE_SIZE, HistoryService
from nodues.services.record_reconciler import RecordReconciler, ReconciliationResult
from nodues.services.record_store import RecordStore
from nodues.services.role_route_resolver import RouteScope, resolve_user
from nodues.services.search_filter import ALL_STATUSES, SearchFilterIndex
from nodues.services.stage_action_service import StageActionSubmitter
from nodues.services.status_classifier import status_counts
from nodues.utils.exceptions import AuthorizationError
from nodues.utils.helpers import log_warning


class DepartmentReviewService:
    """Everything one departmental session does with its applications"""

    def __init__(self, client, session_context: SessionContext, store: Optional[RecordStore] = None,
                 history_page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.session_context = session_context
        self.store = store if store is not None else RecordStore()
        self.reconciler = RecordReconciler(client)
        self.submitter = StageActionSubmitter(client)
        self.history_service = HistoryService(client, per_page=history_page_size)
        self.last_result: Optional[ReconciliationResult] = None

    def scope(self) -> RouteScope:
        """
        Route scope of the active actor

        Every service operation passes through here, so a successful
        check also counts as activity for the idle timeout.
        """
        user = self.session_context.check()
        scope = resolve_user(user)
        if scope.access == 'none':
            raise AuthorizationError(f"Role '{user.role or 'unknown'}' has no clearance scope")
        self.session_context.touch()
        return scope

    def refresh(self) -> ReconciliationResult:
        """Re-run reconciliation and replace the in-memory set wholesale"""
        scope = self.scope()
        result = self.reconciler.fetch(scope)
        self.store.replace(result.records)
        self.last_result = result
        return result

    def list_applications(self, query: Optional[str] = None, status_filter: Optional[str] = ALL_STATUSES,
                          refresh: bool = False) -> List[ClearanceRecord]:
        """
        Records visible to the actor, narrowed by query and status

        Reconciles on first use or when `refresh` is set; otherwise the
        current in-memory set, optimistic updates included, is used.
        """
        if refresh or not self.store.loaded:
            self.refresh()
        else:
            self.scope()
        return SearchFilterIndex(self.store.records).filter(query, status_filter)

    def application_detail(self, application_id: str) -> Optional[ClearanceRecord]:
        """
        One record, enriched with the service's detail view when available

        The detail's actionable stage is preferred over the listing's.
        The stored record is not modified.
        """
        scope = self.scope()
        if not self.store.loaded:
            self.refresh()
        record = self.store.get(application_id)
        if record is None:
            return None

        try:
            details = self.client.get_enriched(record.application_id)
        except (requests.RequestException, ValueError) as e:
            log_warning(f"Detail for application {record.application_id} unavailable, using listing: {e}")
            return record

        if not isinstance(details, dict) or not isinstance(details.get('actionable_stage'), dict):
            return record
        stage = Stage.from_dict(details['actionable_stage'])
        if not scope.includes(stage.department):
            return record
        return replace(record, active_stage=stage)

    def act(self, application_id: str, action: str, remark: Optional[str] = None) -> StageDecision:
        """
        Submit a decision and reflect it locally once accepted

        Raises:
            ValidationError, AuthenticationError, AuthorizationError, SubmissionError
        """
        scope = self.scope()
        if not self.store.loaded:
            self.refresh()
        record = self.store.get(application_id)
        decision = self.submitter.submit(record, action, remark, self.session_context, scope=scope)
        self.store.apply_decision(decision)
        return decision

    def stats(self) -> Dict[str, int]:
        """Dashboard counters over the current set"""
        self.scope()
        if not self.store.loaded:
            self.refresh()
        return status_counts(self.store.records)

    def history(self, query: Optional[str] = None, page: int = 1) -> Dict[str, Any]:
        """One page of the actor's decision history"""
        self.session_context.check()
        self.session_context.touch()
        return self.history_service.page(query, page)
