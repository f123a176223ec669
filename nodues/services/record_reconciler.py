"""
Reconciliation of the enriched and full application feeds
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from nodues.models.clearance import ClearanceRecord, Stage, StudentInfo
from nodues.services.role_route_resolver import RouteScope
from nodues.services.status_classifier import aggregate_status, classify_status
from nodues.utils.exceptions import ReconciliationDegraded
from nodues.utils.helpers import first_present, log_info, log_warning, parse_timestamp

# Field names the services have used for the application identifier, in precedence order
APPLICATION_ID_KEYS = ('application_id', 'id', '_id')

ENRICHED_FIELDS = {
    'roll_number': ('roll_number', 'rollNo', 'student_roll_no'),
    'enrollment_number': ('enrollment_number', 'enrollmentNumber'),
    'name': ('student_name', 'name', 'full_name'),
    'course': ('course', 'student_course'),
    'email': ('student_email', 'email'),
    'mobile': ('student_mobile', 'mobile'),
    'submitted_at': ('created_at', 'application_date', 'date'),
    'status': ('application_status', 'status'),
    'school': ('school_name', 'department_name', 'department'),
}


def resolve_application_id(record: Any, keys: Sequence[str] = APPLICATION_ID_KEYS) -> Optional[str]:
    """
    Normalized string form of a record's application identifier

    Args:
        record: Feed item
        keys: Candidate identifier fields, in precedence order

    Returns:
        Stripped identifier, or None when no key holds a usable value
    """
    if not isinstance(record, dict):
        return None
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


@dataclass
class ReconciliationResult:
    """Merged records plus the feeds that had to be substituted"""
    records: List[ClearanceRecord] = field(default_factory=list)
    degraded: List[ReconciliationDegraded] = field(default_factory=list)
    dropped: int = 0

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)


def _coerce_feed(name: str, payload: Any, degraded: List[ReconciliationDegraded]) -> List[Dict[str, Any]]:
    if not isinstance(payload, list):
        _degrade(name, f"expected a list, got {type(payload).__name__}", degraded)
        return []
    return [item for item in payload if isinstance(item, dict)]


def _degrade(name: str, reason: str, degraded: List[ReconciliationDegraded]) -> None:
    warning = ReconciliationDegraded(name, reason)
    degraded.append(warning)
    log_warning(f"Reconciliation degraded: {warning}")


def build_record(item: Dict[str, Any], application_id: str, full: Optional[Dict[str, Any]],
                 scope: Optional[RouteScope] = None) -> ClearanceRecord:
    """
    Merge one enriched item with its full counterpart

    Args:
        item: Enriched feed item
        application_id: Identifier already resolved for the item
        full: Matching full feed item, if any
        scope: Role scope; a stage outside it is hidden

    Returns:
        Canonical record
    """
    status = str(first_present(item, ENRICHED_FIELDS['status'], 'Pending'))

    stage = None
    overall_status = None
    if full is not None:
        if isinstance(full.get('active_stage'), dict):
            stage = Stage.from_dict(full['active_stage'])
        if isinstance(full.get('stages'), list):
            overall_status = aggregate_status(full['stages'])
    if stage is not None and scope is not None and not scope.includes(stage.department):
        stage = None

    display_id = item.get('display_id')
    return ClearanceRecord(
        application_id=application_id,
        display_id=str(display_id) if display_id else None,
        student=StudentInfo(
            name=str(first_present(item, ENRICHED_FIELDS['name'])),
            roll_number=str(first_present(item, ENRICHED_FIELDS['roll_number'])),
            enrollment_number=str(first_present(item, ENRICHED_FIELDS['enrollment_number'])),
            course=str(first_present(item, ENRICHED_FIELDS['course'])),
            email=str(first_present(item, ENRICHED_FIELDS['email'])),
            mobile=str(first_present(item, ENRICHED_FIELDS['mobile'])),
        ),
        school=str(first_present(item, ENRICHED_FIELDS['school'])),
        submitted_at=parse_timestamp(first_present(item, ENRICHED_FIELDS['submitted_at'], None)),
        status=status,
        category=classify_status(status),
        active_stage=stage,
        overall_status=overall_status,
    )


def reconcile(enriched: Any, full: Any, scope: Optional[RouteScope] = None,
              degraded: Optional[List[ReconciliationDegraded]] = None) -> ReconciliationResult:
    """
    Join the enriched listing with the full listing

    Enriched order is preserved and the first of duplicate enriched
    items is kept. Items without a resolvable identifier are dropped;
    items without a full counterpart are kept with no active stage.
    A feed that is not a list is treated as empty.

    Args:
        enriched: Decoded enriched feed
        full: Decoded full feed
        scope: Role scope used to hide stages of other departments
        degraded: Warnings already collected while fetching

    Returns:
        ReconciliationResult
    """
    degraded = list(degraded or [])
    enriched_items = _coerce_feed('enriched', enriched, degraded)
    full_items = _coerce_feed('full', full, degraded)

    by_id: Dict[str, Dict[str, Any]] = {}
    for item in full_items:
        application_id = resolve_application_id(item)
        if application_id:
            by_id[application_id] = item

    result = ReconciliationResult(degraded=degraded)
    seen = set()
    for item in enriched_items:
        application_id = resolve_application_id(item)
        if not application_id:
            result.dropped += 1
            continue
        if application_id in seen:
            log_warning(f"Duplicate application {application_id} in enriched feed; keeping the first")
            continue
        seen.add(application_id)
        result.records.append(build_record(item, application_id, by_id.get(application_id), scope))

    if result.dropped:
        log_warning(f"Dropped {result.dropped} application(s) without an identifier")
    return result


class RecordReconciler:
    """Fetches both feeds through the approvals client and merges them"""

    def __init__(self, client):
        self.client = client

    def _load_feed(self, name: str, loader: Callable[[], Any],
                   degraded: List[ReconciliationDegraded]) -> Any:
        try:
            return loader()
        except (requests.RequestException, ValueError) as e:
            _degrade(name, str(e) or e.__class__.__name__, degraded)
            return []

    def fetch(self, scope: Optional[RouteScope] = None) -> ReconciliationResult:
        """
        Fetch and reconcile

        A failing feed never fails the whole reconciliation; session
        errors from the client still propagate.
        """
        degraded: List[ReconciliationDegraded] = []
        enriched = self._load_feed('enriched', self.client.list_enriched, degraded)
        full = self._load_feed('full', self.client.list_full, degraded)
        result = reconcile(enriched, full, scope=scope, degraded=degraded)
        log_info(f"Reconciled {len(result.records)} application(s)")
        return result
