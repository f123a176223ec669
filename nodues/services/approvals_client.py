"""
HTTP client for the external approvals service
"""

from typing import Any, Dict, Optional

import requests

from nodues.models.session import SessionContext
from nodues.utils.exceptions import AuthenticationError, SubmissionError
from nodues.utils.helpers import log_error, log_info

# Endpoints consumed from the approvals service
ENRICHED_LIST_PATH = '/api/approvals/all/enriched'
FULL_LIST_PATH = '/api/approvals/all'
ENRICHED_DETAIL_PATH = '/api/approvals/enriched/{application_id}'
STAGE_DECISION_PATH = '/api/approvals/{stage_id}/{verb}'
HISTORY_PATH = '/api/approvals/history'

NO_CACHE_HEADERS = {
    'Cache-Control': 'no-cache, no-store, must-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
}

# A 401 carrying one of these markers means the token itself is no longer valid
EXPIRY_MARKERS = ('expired', 'login again', 'invalid token')


def extract_error_message(response: Optional[requests.Response]) -> Optional[str]:
    """
    Pull the server-provided message out of an error response

    Args:
        response: Error response

    Returns:
        The `detail` or `message` field, or None when the body has neither
    """
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    detail = body.get('detail') or body.get('message')
    if isinstance(detail, list):
        # Validation errors arrive as a list of {"msg": ...} objects
        parts = [str(item.get('msg', item)) if isinstance(item, dict) else str(item) for item in detail]
        detail = '; '.join(parts)
    return str(detail) if detail else None


class ApprovalsClient:
    """Approvals service client bound to one session context"""

    def __init__(self, base_url: str, session_context: SessionContext, timeout: float = 15,
                 http: Optional[requests.Session] = None):
        self.base_url = (base_url or '').rstrip('/')
        self.session_context = session_context
        self.timeout = timeout
        self.http = http or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> Dict[str, str]:
        headers = dict(NO_CACHE_HEADERS)
        headers['Content-Type'] = 'application/json'
        token = self.session_context.token
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Send one request and handle session expiry"""
        response = self.http.request(
            method,
            self._url(path),
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs
        )
        if response.status_code == 401:
            message = extract_error_message(response) or ''
            if any(marker in message.lower() for marker in EXPIRY_MARKERS):
                self.session_context.expire(message)
                raise AuthenticationError("Session expired. Please login again.")
        return response

    def _get_json(self, path: str) -> Any:
        """
        GET a JSON document

        Raises:
            requests.RequestException: Transport failure or non-success status
            ValueError: Body is not valid JSON
        """
        response = self._request('GET', path)
        response.raise_for_status()
        return response.json()

    def list_enriched(self) -> Any:
        """Denormalized application listing"""
        return self._get_json(ENRICHED_LIST_PATH)

    def list_full(self) -> Any:
        """Full application listing carrying active stage detail"""
        return self._get_json(FULL_LIST_PATH)

    def get_enriched(self, application_id: str) -> Any:
        """Enriched detail for a single application"""
        return self._get_json(ENRICHED_DETAIL_PATH.format(application_id=application_id))

    def list_history(self) -> Any:
        """Action history for the current actor"""
        return self._get_json(HISTORY_PATH)

    def submit_decision(self, stage_id: str, verb: str, department_id: Optional[int],
                        remarks: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Submit one decision against one stage

        Args:
            stage_id: Target stage
            verb: 'approve' or 'reject'
            department_id: Acting department identity
            remarks: Optional remark

        Returns:
            Response body when it is a JSON object, else None

        Raises:
            SubmissionError: Service refused the decision or could not be reached
        """
        generic = f"Failed to {verb} application"
        payload = {'department_id': department_id, 'remarks': remarks}
        path = STAGE_DECISION_PATH.format(stage_id=stage_id, verb=verb)

        try:
            response = self._request('POST', path, json=payload)
        except requests.RequestException as e:
            log_error(f"Stage {stage_id} {verb} request failed", e)
            raise SubmissionError(generic, transport=True)

        if not response.ok:
            message = extract_error_message(response) or generic
            log_error(f"Stage {stage_id} {verb} rejected by approvals service ({response.status_code}): {message}")
            raise SubmissionError(message, status_code=response.status_code)

        log_info(f"Stage {stage_id} {verb} accepted")
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None
