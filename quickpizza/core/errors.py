"""Error Hierarchy: typed, categorized exceptions raised by the catalog store.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are reported to the caller and never retried
    - Storage errors are NOT wrapped here: SQLAlchemy/driver exceptions reach the
      caller unchanged so retry decisions stay with the caller
    - "Not found" is never an error: lookups return None

Design Decisions:
    - Single hierarchy with QuickPizzaError base: callers catch one type for domain failures
    - InjectedFaultError carries the check point name so test harnesses can assert on it
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INJECTED_FAULT = "injected_fault"


class QuickPizzaError(Exception):
    """Base exception for all catalog domain errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity


# ─── Validation Errors ──────────────────────────────────────────

class InvalidUserError(QuickPizzaError):
    """Candidate user failed a registration rule."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "INVALID_USER", ErrorCategory.VALIDATION,
        )
        self.field = field


class InvalidRecommendationError(QuickPizzaError):
    """Pizza cannot be recorded as a recommendation."""
    def __init__(self, message: str):
        super().__init__(
            message, "INVALID_RECOMMENDATION", ErrorCategory.VALIDATION,
        )


class InvalidRatingError(QuickPizzaError):
    """Rating failed validation."""
    def __init__(self, message: str):
        super().__init__(
            message, "INVALID_RATING", ErrorCategory.VALIDATION,
        )


# ─── Injected Faults ────────────────────────────────────────────

class InjectedFaultError(QuickPizzaError):
    """Synthetic failure raised by an armed fault injection check point."""
    def __init__(self, check_point: str, message: str):
        super().__init__(
            message, "INJECTED_FAULT", ErrorCategory.INJECTED_FAULT,
            ErrorSeverity.WARNING,
        )
        self.check_point = check_point
