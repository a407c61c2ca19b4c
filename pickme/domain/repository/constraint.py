"""Names of the storage constraints the domain reacts to."""

from sqlalchemy.exc import IntegrityError

# One proposal per (pick request, picker)
MATCH_REQUEST_PICKER_UNIQUE = "uq_match_request_picker"

# One review per (meetup, reviewer)
REVIEW_MEETUP_REVIEWER_UNIQUE = "uq_review_meetup_reviewer"


def violates(error: IntegrityError, constraint: str) -> bool:
    """Tell whether ``error`` was raised by the named constraint.

    asyncpg exposes ``constraint_name`` on the driver error, which SQLAlchemy
    chains as the cause of ``error.orig``. Otherwise fall back to the message,
    which always quotes the constraint.
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name == constraint
    return f'"{constraint}"' in str(orig)
