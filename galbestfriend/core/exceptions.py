"""
Custom exceptions
Hierarchical exception classes for uniform error handling
"""

from typing import Any


class GalBestfriendException(Exception):
    """Base exception for the application"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(GalBestfriendException):
    """Configuration problems"""


class ValidationError(GalBestfriendException):
    """Invalid input"""

    def __init__(self, message: str, field: str | None = None,
                 value: Any | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = value


class BusinessLogicError(GalBestfriendException):
    """Domain rule violations"""


class SessionBusyError(BusinessLogicError):
    """A reply is still being generated for this session"""

    def __init__(self, message: str = "A reply is still pending",
                 session_id: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if session_id:
            self.details['session_id'] = session_id


class SessionNotFoundError(BusinessLogicError):
    """Unknown chat session"""

    def __init__(self, session_id: str, **kwargs):
        super().__init__(f"Session not found: {session_id}", **kwargs)
        self.details['session_id'] = session_id


class ExternalServiceError(GalBestfriendException):
    """Errors from external services (LLM API, chat proxy)"""

    def __init__(self, message: str, service_name: str = "unknown",
                 status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.details['service_name'] = service_name
        if status_code:
            self.details['status_code'] = status_code


class PersistenceError(GalBestfriendException):
    """Preference store read/write failures"""

    def __init__(self, message: str, key: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if key:
            self.details['key'] = key
