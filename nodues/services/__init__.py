"""
Services package initialization
"""

from nodues.services.approvals_client import ApprovalsClient
from nodues.services.history_service import HistoryService
from nodues.services.record_reconciler import RecordReconciler, ReconciliationResult, reconcile
from nodues.services.record_store import RecordStore
from nodues.services.review_service import DepartmentReviewService
from nodues.services.role_route_resolver import RouteScope, resolve_role, resolve_user
from nodues.services.search_filter import SearchFilterIndex, filter_records
from nodues.services.session_service import SessionService
from nodues.services.stage_action_service import StageActionSubmitter
from nodues.services.status_classifier import classify_status, display_status, aggregate_status

__all__ = [
    'ApprovalsClient', 'HistoryService', 'RecordReconciler', 'ReconciliationResult', 'reconcile',
    'RecordStore', 'DepartmentReviewService', 'RouteScope', 'resolve_role', 'resolve_user',
    'SearchFilterIndex', 'filter_records', 'SessionService', 'StageActionSubmitter',
    'classify_status', 'display_status', 'aggregate_status'
]
