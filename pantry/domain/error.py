"""Domain layer errors.

Every domain error carries an ``ErrorKind`` so the application facade can
turn it into a typed failure without inspecting messages.
"""

from pantry.domain.value.types import ErrorKind


class DomainError(Exception):
    """Base domain error."""

    kind: ErrorKind = ErrorKind.INTERNAL

    # When True, changes made before the error are committed anyway
    preserves_changes: bool = False


class NotAuthenticatedError(DomainError):
    """Raised when no actor identity can be resolved."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, actor_id: str | None = None):
        self.actor_id = actor_id
        super().__init__("Authentication required")


class ForbiddenError(DomainError):
    """Raised when an actor's role is below the capability an action needs."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, action: str, user_id: str, detail: str | None = None):
        self.action = action
        self.user_id = user_id
        super().__init__(
            detail or f"User {user_id} has insufficient permissions to {action}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidArgumentError(DomainError):
    """Raised for malformed payloads: out-of-range values, unknown tokens."""

    kind = ErrorKind.INVALID_ARGUMENT


class ConflictError(DomainError):
    """Raised when the store contradicts a completed write.

    Steps that already ran are kept; there is no compensating rollback.
    """

    kind = ErrorKind.CONFLICT
    preserves_changes = True


class UnavailableError(DomainError):
    """Raised when the underlying store cannot be reached."""

    kind = ErrorKind.UNAVAILABLE
