"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input (non-positive duration, bad coordinates, bad rating)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller lacks the required relationship to an entity."""

    def __init__(self, resource: str, resource_id: str, user_id: str, action: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class InvalidStateError(DomainError):
    """Raised when an operation's status precondition does not hold."""

    def __init__(self, resource: str, resource_id: str, current: str, action: str):
        self.resource = resource
        self.resource_id = resource_id
        self.current = current
        super().__init__(f"Cannot {action} {resource} {resource_id} in state {current}")


class SelfMatchError(DomainError):
    """Raised when a user tries to pick their own request."""

    def __init__(self, pick_request_id: str):
        super().__init__(f"Cannot pick your own request {pick_request_id}")


class DuplicateError(DomainError):
    """Base for uniqueness violations."""

    pass


class DuplicateProposalError(DuplicateError):
    """Raised when a picker proposes twice on the same request."""

    def __init__(self, pick_request_id: str, picker_id: str):
        super().__init__(
            f"User {picker_id} already proposed on pick request {pick_request_id}"
        )


class DuplicateReviewError(DuplicateError):
    """Raised when a participant reviews the same meetup twice."""

    def __init__(self, meetup_id: str, reviewer_id: str):
        super().__init__(f"User {reviewer_id} already reviewed meetup {meetup_id}")


class StorageConflictError(DomainError):
    """Raised by repositories when a concurrent writer got there first.

    Transaction runners catch this and retry the unit of work.
    """

    pass


class ConcurrencyConflictError(DomainError):
    """Raised when a unit of work keeps conflicting after all retries.

    Transient: the caller may retry the whole operation.
    """

    pass
