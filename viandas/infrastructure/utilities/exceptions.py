"""
Custom exceptions for the Viandas CRM
"""

import logging
import traceback

from viandas.domain.repositories.errors import RepositoryError

logger = logging.getLogger(__name__)


class ViandasError(Exception):
    """Base exception for Viandas CRM"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or "GENERAL_ERROR"


class DatabaseError(ViandasError, RepositoryError):
    """Database-related errors"""

    def __init__(self, message: str, operation: str = None, user_message: str = None):
        super().__init__(
            message,
            user_message
            or "Sorry, there was a problem with the record store. Please try again.",
            "DATABASE_ERROR",
        )
        self.operation = operation


class StoreOperationError(DatabaseError):
    """A record store call (list, get, insert, update, delete) failed"""

    def __init__(self, operation: str, reason: str = None):
        super().__init__(
            f"Store operation failed: {operation}: {reason}",
            operation=operation,
            user_message=f"Could not complete '{operation}'. Please try again.",
        )
        self.reason = reason


class ValidationError(ViandasError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message, message, "VALIDATION_ERROR"  # Validation errors are user-friendly
        )
        self.field = field


class BusinessLogicError(ViandasError):
    """Business rule violations"""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or message, "BUSINESS_ERROR")


class OrderNotFoundError(BusinessLogicError):
    """Order not found"""

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}", "The order no longer exists.")
        self.order_id = order_id


class FollowupNotFoundError(BusinessLogicError):
    """Follow-up task not found"""

    def __init__(self, followup_id: str):
        super().__init__(
            f"Follow-up not found: {followup_id}", "The follow-up no longer exists."
        )
        self.followup_id = followup_id


class InvalidStatusTransitionError(BusinessLogicError):
    """Order status change not allowed"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Invalid status transition: {current} -> {requested}",
            f"An order in status '{current}' cannot move to '{requested}'.",
        )
        self.current = current
        self.requested = requested


class DuplicateSubmissionError(BusinessLogicError):
    """A submit action is already in flight"""

    def __init__(self):
        super().__init__(
            "Order submission already in progress",
            "The order is still being saved. Please wait.",
        )


class AuthenticationError(ViandasError):
    """Sign-in failed"""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, "Invalid email or password.", "AUTH_ERROR")


class NotAuthenticatedError(ViandasError):
    """Operation requires a signed-in user"""

    def __init__(self):
        super().__init__(
            "No user signed in", "Please sign in to continue.", "NOT_AUTHENTICATED"
        )


class PermissionDeniedError(ViandasError):
    """Operation requires the admin role"""

    def __init__(self, action: str):
        super().__init__(
            f"Admin role required for: {action}",
            "Only administrators can do this.",
            "PERMISSION_DENIED",
        )
        self.action = action


# pylint: disable=too-few-public-methods
class ErrorReporter:
    """Error reporting for failures that are handled but must not be lost"""

    @staticmethod
    def report_critical_error(error: Exception):
        """Report critical errors to the error log"""
        logger.critical(
            "CRITICAL ERROR: %s",
            error,
            extra={
                "error_type": type(error).__name__,
                "traceback": traceback.format_exc(),
            },
        )

    @staticmethod
    def report_business_error(error: ViandasError, user_id: str | None = None):
        """Report business logic errors for analysis"""
        logger.info(
            "Business error: %s - %s",
            error.error_code,
            error,
            extra={
                "error_code": error.error_code,
                "user_id": user_id,
                "error_type": type(error).__name__,
            },
        )

