"""Errors raised by the hold'em engine.

Usage and resource errors are raised before any state is touched, so a
rejected operation leaves the table exactly as it was.
"""


class HoldemError(Exception):
    """Base class for every engine error."""


class RoundStateError(HoldemError, RuntimeError):
    """Operation issued out of sequence (no round, decision already made, ...)."""


class InvalidActionError(HoldemError, ValueError):
    """Malformed action such as a negative amount or an unknown player."""


class InsufficientChipsError(HoldemError, ValueError):
    """The acting player's balance cannot cover the requested amount."""


class DeckExhaustedError(HoldemError, ValueError):
    """The card source has fewer cards left than requested."""


class GameOverError(HoldemError):
    """Fewer than two players can be dealt in; the game cannot continue."""


class GameConfigError(HoldemError, ValueError):
    """Invalid table configuration."""
