"""Failure classes for room and match operations.

Socket handlers decide how each one surfaces: user input errors go back to
the sender, illegal moves are dropped, infrastructure failures are logged
and reported generically.
"""


class GameError(Exception):
    pass


class UserInputError(GameError):
    """Bad request from a player (missing names, unknown or full room)."""


class IllegalMoveAttempt(GameError):
    """Stale or duplicate roll; never shown to the player."""


class InfrastructureFailure(GameError):
    """The room registry could not be read or written."""

    public_message = 'Server error, please try again.'
