"""UCAN fixture generator errors.

Every failure raised while building a fixture derives from FixtureError.
None of them is retried: an incomplete catalog would give verifiers false
negatives, so callers either abort the run or skip and report the scenario.
"""

from typing import Any


class FixtureError(Exception):
    """Base class for all fixture generator errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict | None = None,
        cause: Exception | None = None,
    ):
        """Initialize a FixtureError.

        Args:
            code: Stable error code (e.g., UCAN_DECODE_ERROR)
            message: Human-readable error message
            details: Additional context (optional)
            cause: Underlying exception if chained (optional)
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict:
        """Convert error to dictionary representation."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


# Codec Errors
class DecodeError(FixtureError):
    """Token part is not base64url-encoded JSON object."""

    def __init__(self, message: str = "Malformed token part", **kwargs: Any) -> None:
        super().__init__("UCAN_DECODE_ERROR", message, **kwargs)


# Tamper Errors
class FieldNotFound(FixtureError):
    """Mutation requested on a field the part does not carry."""

    def __init__(self, message: str = "Field not found", **kwargs: Any) -> None:
        super().__init__("UCAN_FIELD_NOT_FOUND", message, **kwargs)


class UnsupportedPart(FixtureError):
    """Part name outside of header and payload."""

    def __init__(self, message: str = "Unsupported token part", **kwargs: Any) -> None:
        super().__init__("UCAN_UNSUPPORTED_PART", message, **kwargs)


# Crypto Errors
class SigningError(FixtureError):
    """Signer rejected the input."""

    def __init__(self, message: str = "Signing failed", **kwargs: Any) -> None:
        super().__init__("UCAN_SIGNING_ERROR", message, **kwargs)


class InvalidInputError(FixtureError):
    """Invalid input parameters."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__("UCAN_INVALID_INPUT", message, **kwargs)


# Catalog Errors
class CatalogError(FixtureError):
    """A scenario failed while the catalog was being built."""

    def __init__(
        self, message: str = "Fixture catalog failed", scenario: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__("UCAN_CATALOG_ERROR", message, **kwargs)
        self.scenario = scenario
