"""
In-memory record set with optimistic updates
"""

import time
from typing import Iterable, List, Optional

from nodues.models.clearance import ClearanceRecord, StageDecision
from nodues.services.status_classifier import classify_status
from nodues.utils.helpers import log_info


class RecordStore:
    """
    Holds the reconciled records of one session

    A successful decision is reflected in place without a refetch.
    The next reconciliation replaces the whole set, so the service's
    view overrides any optimistic value.
    """

    def __init__(self, records: Optional[Iterable[ClearanceRecord]] = None):
        self._records: List[ClearanceRecord] = list(records or [])
        self.loaded = records is not None
        self.last_used = time.time()

    def mark_used(self, now: Optional[float] = None) -> None:
        """Record that the owning session used this store"""
        self.last_used = now if now is not None else time.time()

    @property
    def records(self) -> List[ClearanceRecord]:
        return list(self._records)

    def replace(self, records: Iterable[ClearanceRecord]) -> None:
        """Swap in a freshly reconciled set"""
        self._records = list(records)
        self.loaded = True

    def get(self, application_id: str) -> Optional[ClearanceRecord]:
        """Record by application id, or None"""
        key = str(application_id).strip()
        for record in self._records:
            if record.application_id == key:
                return record
        return None

    def apply_decision(self, decision: StageDecision) -> bool:
        """
        Reflect an accepted decision on the matching record

        Args:
            decision: Decision returned by the stage action submitter

        Returns:
            True if a record was updated
        """
        record = self.get(decision.application_id)
        if record is None:
            log_info(f"No local record for application {decision.application_id}; waiting for refresh")
            return False

        record.status = decision.status
        record.category = classify_status(decision.status)
        if record.active_stage is not None:
            record.active_stage.status = decision.status
            record.active_stage.remark = decision.remark
            record.active_stage.actioned_by = decision.actioned_by
            record.active_stage.actioned_at = decision.actioned_at
        return True
