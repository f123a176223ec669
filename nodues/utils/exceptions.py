"""
Custom exceptions for the No-Dues approval workflow
"""

from typing import Optional


class NoDuesException(Exception):
    """Base exception for the No-Dues application"""
    pass


class ValidationError(NoDuesException):
    """Local precondition failure, raised before any request is sent"""
    pass


class AuthenticationError(NoDuesException):
    """Session missing, inactive or expired"""
    pass


class AuthorizationError(NoDuesException):
    """Actor's role scope does not permit the operation"""
    pass


class SubmissionError(NoDuesException):
    """
    Stage decision was not applied by the approvals service

    Attributes:
        status_code: HTTP status returned by the service, None on transport failure
        transport: True when the request never received a response
    """

    def __init__(self, message: str, status_code: Optional[int] = None, transport: bool = False):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.transport = transport

    @property
    def retryable(self) -> bool:
        return self.transport


class ReconciliationDegraded(NoDuesException):
    """One of the two listing feeds could not be read"""

    def __init__(self, feed: str, reason: str):
        super().__init__(f"{feed} feed unavailable: {reason}")
        self.feed = feed
        self.reason = reason
