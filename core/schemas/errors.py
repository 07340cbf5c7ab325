"""
Schemas & Canonicalization
File: errors.py

Purpose: Error taxonomy for query construction and signing.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the client."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Draft Errors
    PAYLOAD_MISSING = "PAYLOAD_MISSING"
    PAYLOAD_ALREADY_SELECTED = "PAYLOAD_ALREADY_SELECTED"
    INVALID_COUNTER = "INVALID_COUNTER"
    INVALID_CREATED_TIME = "INVALID_CREATED_TIME"

    # Crypto Errors
    INVALID_KEY = "INVALID_KEY"
    SIGNING_FAILED = "SIGNING_FAILED"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class QueryError(BaseModel):
    """
    Base error model for structured error communication.

    Used where an error has to be carried as data (e.g. inside a
    VerificationResult) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.PAYLOAD_MISSING],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class LedgerQueryException(Exception):
    """
    Base exception for all query client errors.

    Carries structured error information and can be converted
    to a QueryError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "LEDGER_QUERY_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> QueryError:
        """Convert this exception to a QueryError model."""
        return QueryError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(LedgerQueryException):
    """Raised when a draft or its construction arguments are invalid."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.SCHEMA_VALIDATION_ERROR,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class PayloadAlreadySelectedError(ValidationError):
    """Raised by a strict builder when a second payload is selected."""

    def __init__(
        self,
        current: str,
        requested: str,
    ) -> None:
        super().__init__(
            message=f"payload already selected: {current} (requested {requested})",
            code=ErrorCodes.PAYLOAD_ALREADY_SELECTED,
            field_path="payload",
            details={"current": current, "requested": requested},
        )


class CryptoError(LedgerQueryException):
    """Raised when the signing primitive rejects the key or fails to sign."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.SIGNING_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


class CanonicalizationException(LedgerQueryException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
