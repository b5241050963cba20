"""Validation: pure checks for entities the catalog records.

Invariants:
    - validate_new_user checks rules in a fixed order; the first failure wins:
      empty username -> too long -> reserved name -> empty password
    - Password length/complexity is deliberately unconstrained
    - Length limits count characters, not encoded bytes
"""

from quickpizza.core.errors import (
    InvalidUserError, InvalidRecommendationError, InvalidRatingError,
)

MAX_USERNAME_LENGTH = 32
RESERVED_USERNAME = "default"
MIN_STARS = 1
MAX_STARS = 5


def validate_new_user(username: str, password: str) -> None:
    """Raise InvalidUserError for the first rule the candidate breaks."""
    if not username:
        raise InvalidUserError("username field is empty", "username")
    if len(username) > MAX_USERNAME_LENGTH:
        raise InvalidUserError("username field is too long", "username")
    if username == RESERVED_USERNAME:
        raise InvalidUserError("username field is invalid", "username")
    if not password:
        raise InvalidUserError("password is empty", "password")


def validate_recommendation(dough_id: int | None) -> None:
    if dough_id is None:
        raise InvalidRecommendationError("pizza has no dough")


def validate_rating(stars: int | None) -> None:
    if stars is None:
        raise InvalidRatingError("rating has no stars")
    if not MIN_STARS <= stars <= MAX_STARS:
        raise InvalidRatingError(
            f"stars must be between {MIN_STARS} and {MAX_STARS}",
        )
