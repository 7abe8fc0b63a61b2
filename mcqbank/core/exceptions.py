"""Custom exceptions for seeding and content errors."""

from typing import Any


class MCQBankError(Exception):
    """Base exception with a standard code/message/details format.

    Example:
        raise MCQBankError(
            code="CONTENT_NOT_FOUND",
            message="Content file not found",
            details={"path": "questions/focs2.json"},
        )
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            code: Error code (e.g., 'PARTITION_UNKNOWN', 'CONTENT_INVALID').
            message: Human-readable error message.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Return the error in the standard envelope."""
        return {"error": {"code": self.code, "message": self.message, "details": self.details}}


class UnknownPartitionError(MCQBankError):
    """Raised when a requested partition is not in the catalog."""

    def __init__(self, requested: str, available: list[str]) -> None:
        super().__init__(
            code="PARTITION_UNKNOWN",
            message=f"No matching module or topic found for: {requested}",
            details={"requested": requested, "available": available},
        )
        self.requested = requested
        self.available = available


class PartitionReseedError(MCQBankError):
    """Raised when a partition's transaction fails and is rolled back."""

    def __init__(self, module_id: str, topic: str, reason: str) -> None:
        super().__init__(
            code="PARTITION_RESEED_FAILED",
            message=f"Reseed of {module_id}/{topic} failed and was rolled back: {reason}",
            details={"module_id": module_id, "topic": topic},
        )
        self.module_id = module_id
        self.topic = topic


class CleanupError(MCQBankError):
    """Raised when a cleanup transaction fails and is rolled back."""

    def __init__(self, reason: str) -> None:
        super().__init__(code="CLEANUP_FAILED", message=f"Cleanup failed and was rolled back: {reason}")


class ContentLoadError(MCQBankError):
    """Raised when a content file cannot be read or is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            code="CONTENT_INVALID",
            message=f"Could not load {path}: {reason}",
            details={"path": path},
        )
        self.path = path


class CatalogError(MCQBankError):
    """Raised when the partition catalog is malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(code="CATALOG_INVALID", message=message, details=details)
