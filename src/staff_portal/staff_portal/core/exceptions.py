class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRole(ValidationError):
    """Raised when a role outside the assignable set is requested."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class Forbidden(AuthorizationError):
    pass


class ForbiddenTargetIsAdmin(AuthorizationError):
    """Raised when trying to change the role of an admin."""


class NotFoundError(DomainError):
    pass


class PolicyViolation(DomainError):
    """Raised when a well-formed request breaks a leave/attendance rule."""


class AdvanceNoticeViolation(PolicyViolation):
    pass


class QuotaExceeded(PolicyViolation):
    pass


class WeeklyLimitViolation(PolicyViolation):
    pass


class AlreadyCheckedIn(PolicyViolation):
    pass


class NoOpenSession(PolicyViolation):
    pass


class StateError(DomainError):
    pass


class InvalidStateTransition(StateError):
    pass


class StoreError(DomainError):
    """Raised when the database fails; carries the upstream message."""
