"""
Error types rendered as {"error": ..., "code": ...} responses
"""
from typing import Optional


class FitnessApiError(Exception):
    """Base exception for all API errors"""

    http_status = 500

    def __init__(self, message: str, code: str, http_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationFailed(FitnessApiError):
    """Request input failed validation"""
    http_status = 400


class Unauthorized(FitnessApiError):
    http_status = 401


class ResourceNotFound(FitnessApiError):
    http_status = 404


class DatabaseUnavailable(FitnessApiError):
    http_status = 503

    def __init__(self, message: str = "Database not configured", code: str = "DATABASE_NOT_CONFIGURED"):
        super().__init__(message, code)
