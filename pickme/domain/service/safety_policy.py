"""Safety score adjustment policies.

A policy maps the reviewed user's current score, the new review and the
reviews they had before it to a new score. The result is clamped to the
0..100 range by the caller, so policies don't have to.
"""

from typing import Callable, Sequence

from pickme.domain.model import Review

SafetyScorePolicy = Callable[[int, Review, Sequence[Review]], int]


def unchanged_policy(
    current_score: int, review: Review, history: Sequence[Review]
) -> int:
    """Leave the score where it is."""
    return current_score


def nudge_policy(step: int) -> SafetyScorePolicy:
    """Move the score ``step`` points up on a positive review, down otherwise.

    Args:
        step: Points to move per review

    Returns:
        Policy function
    """

    def policy(current_score: int, review: Review, history: Sequence[Review]) -> int:
        if review.is_positive:
            return current_score + step
        return current_score - step

    return policy


def policy_from_name(name: str, nudge_step: int = 5) -> SafetyScorePolicy:
    """Look up a policy by its settings name.

    Raises:
        ValueError: If the name is unknown
    """
    if name == "unchanged":
        return unchanged_policy
    if name == "nudge":
        return nudge_policy(nudge_step)
    raise ValueError(f"Unknown safety score policy: {name}")
