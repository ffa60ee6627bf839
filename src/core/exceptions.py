"""
Custom exceptions shared by all layers.

Every error carries one of four codes, which the transport layer can map onto a user-facing response.
NOTE: none of these derive from ValueError, so pydantic validators re-raise them as-is instead of wrapping them.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    BAD_REQUEST = "BAD_REQUEST"


class GameError(Exception):
    """Top-level exception. Services/API can catch this one to handle anything raised by the game."""

    code: ErrorCode = ErrorCode.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


# --- UNAUTHENTICATED ---
class UnauthenticatedError(GameError):
    """No player could be resolved from the supplied credential."""

    code = ErrorCode.UNAUTHENTICATED


# --- NOT FOUND ---
class NotFoundError(GameError):
    code = ErrorCode.NOT_FOUND


class RepositoryError(NotFoundError):
    """Game record does not exist in the repository."""


class PlayerNotFoundError(NotFoundError):
    """Credential resolved, but no matching player record."""


# --- FORBIDDEN ---
class ForbiddenError(GameError):
    code = ErrorCode.FORBIDDEN


class NotAParticipantError(ForbiddenError):
    """Only the two players of a game may act on it."""


class NotInvitedError(ForbiddenError):
    """Invite-only game joined by someone else."""


# --- BAD REQUEST (rules violations) ---
class BadRequestError(GameError):
    code = ErrorCode.BAD_REQUEST


class GameStateError(BadRequestError):
    """Action not allowed in the game's current phase."""


class SelfPlayError(BadRequestError):
    """The creator of a game cannot join it as the opponent."""


class NotYourTurnError(BadRequestError):
    pass


class IllegalMoveError(BadRequestError):
    pass


class SelfCheckError(IllegalMoveError):
    """Move would leave the mover's own king in check."""


class InvalidRequestError(BadRequestError):
    """Request could not be interpreted (malformed fields)."""


class InvalidFENError(BadRequestError):
    pass


class StaleGameError(BadRequestError):
    """Game was changed by another request since it was read. Nothing got stored; the request may be retried."""
