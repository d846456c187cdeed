"""
PartsDesk Exception Hierarchy

All exceptions include code, message, and details so they can be logged and
returned to clients in one consistent shape.

Exception Hierarchy:
    PartsDeskError
    ├── NotFoundError
    ├── CatalogError
    │   ├── DuplicateSlugError
    │   └── ReferentialIntegrityError
    └── EnquirySubmissionError
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class PartsDeskError(Exception):
    """
    Base exception for all PartsDesk custom errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: P0-P3 severity level
        status_code: HTTP status used when the error reaches a route
    """

    default_code: str = "PARTSDESK_ERROR"
    default_severity: str = "P2"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class NotFoundError(PartsDeskError):
    """A referenced record does not exist."""
    default_code = "NOT_FOUND"
    default_severity = "P3"
    status_code = 404

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "resource_type": resource_type,
            "resource_id": resource_id,
        })
        super().__init__(message, details=details, **kwargs)


# =============================================================================
# CATALOG ERRORS
# =============================================================================

class CatalogError(PartsDeskError):
    """Base exception for catalogue write failures."""
    default_code = "CATALOG_ERROR"
    default_severity = "P3"
    status_code = 409


class DuplicateSlugError(CatalogError):
    """Slug already taken by another record of the same kind."""
    default_code = "DUPLICATE_SLUG"

    def __init__(self, message: str, slug: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        details["slug"] = slug
        super().__init__(message, details=details, **kwargs)


class ReferentialIntegrityError(CatalogError):
    """Write would orphan rows that reference the target."""
    default_code = "REFERENTIAL_INTEGRITY"

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        referenced_by: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details.update({
            "resource_type": resource_type,
            "resource_id": resource_id,
            "referenced_by": referenced_by,
        })
        super().__init__(message, details=details, **kwargs)


# =============================================================================
# ENQUIRY ERRORS
# =============================================================================

class EnquirySubmissionError(PartsDeskError):
    """Persisting an enquiry failed. The user may retry."""
    default_code = "ENQUIRY_SUBMISSION_FAILED"
    default_severity = "P1"
    status_code = 502
    retryable = True
