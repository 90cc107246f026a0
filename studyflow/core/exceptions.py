"""
Custom exceptions for the StudyFlow platform.
"""

from typing import Optional, Any, Dict


class StudyFlowException(Exception):
    """Base exception for all StudyFlow-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(StudyFlowException):
    """Raised when record validation or id parsing fails."""
    pass


class PersistenceError(StudyFlowException):
    """Raised when a storage slot cannot be read, parsed or written."""
    pass


class ConfigurationError(StudyFlowException):
    """Raised when configuration is invalid."""
    pass
