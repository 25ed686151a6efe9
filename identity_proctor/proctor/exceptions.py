"""
Custom exceptions for the proctoring service.
"""

from typing import Optional


class ProctorError(Exception):
    """Base exception for proctoring errors."""
    pass


class ImageDecodeError(ProctorError):
    """Raised when the submitted image is missing or cannot be decoded."""
    pass


class EnrollmentError(ProctorError):
    """
    Raised when enrollment fails in either the indexing or the persistence step.
    
    `orphaned` is True when the provider still holds an indexed face that
    has no matching profile.
    """
    
    def __init__(self, message: str, stage: str, orphaned: bool = False, cause: Optional[Exception] = None):
        super().__init__(message)
        self.stage = stage
        self.orphaned = orphaned
        self.cause = cause
