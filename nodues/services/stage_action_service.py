"""
Departmental decisions against a single approval stage
"""

from datetime import datetime, timezone
from typing import Optional

from nodues.models.clearance import APPROVED, REJECTED, ClearanceRecord, StageDecision
from nodues.models.session import SessionContext
from nodues.services.role_route_resolver import RouteScope, resolve_user
from nodues.utils.exceptions import AuthorizationError
from nodues.utils.helpers import first_present, log_info, parse_timestamp
from nodues.utils.validators import validate_action, validate_remark, validate_stage_id

ACTION_STATUS = {
    'approve': APPROVED,
    'reject': REJECTED,
}


class StageActionSubmitter:
    """Validates and submits one decision per call"""

    def __init__(self, client):
        self.client = client

    def submit(self, record: Optional[ClearanceRecord], action: str, remark: Optional[str],
               session_context: SessionContext, scope: Optional[RouteScope] = None) -> StageDecision:
        """
        Approve or reject the record's active stage

        Every precondition is checked before the request is sent. The
        call is never retried here: a caller may resubmit only after a
        SubmissionError with `transport` set.

        Args:
            record: Reconciled record carrying the active stage
            action: 'approve' or 'reject'
            remark: Free text, required when rejecting
            session_context: Acting session
            scope: Actor's route scope, resolved from the session when omitted

        Returns:
            StageDecision describing the applied status

        Raises:
            ValidationError: Invalid action, missing remark or missing stage
            AuthenticationError: Session is not active
            AuthorizationError: Actor's scope cannot act on stages
            SubmissionError: Service refused the decision or was unreachable
        """
        verb = validate_action(action)
        cleaned_remark = validate_remark(verb, remark)
        stage_id = validate_stage_id(record.stage_id if record is not None else None)

        user = session_context.check()
        scope = scope or resolve_user(user)
        if not scope.can_act:
            raise AuthorizationError(f"Role '{user.role or 'unknown'}' cannot act on clearance stages")

        body = self.client.submit_decision(stage_id, verb, user.acting_department_id, cleaned_remark) or {}
        session_context.touch()

        actioned_at = parse_timestamp(first_present(body, ('actioned_at', 'reviewed_at', 'updated_at'), None))
        decision = StageDecision(
            application_id=record.application_id,
            stage_id=stage_id,
            action=verb,
            status=ACTION_STATUS[verb],
            remark=cleaned_remark,
            actioned_by=user.name or user.email or user.id,
            actioned_at=actioned_at or datetime.now(timezone.utc),
        )
        log_info(f"Application {decision.application_id} stage {stage_id} marked {decision.status}")
        return decision
