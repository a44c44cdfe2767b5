"""
Rule errors raised by the round and match engines.

All of them are recoverable: the engine validates before it mutates, so the
state is unchanged when one is raised. ``ScoutSession`` turns them into
rejected ``ActionResult`` values for the presentation layer.
"""
from __future__ import annotations


class ScoutError(ValueError):
    """Base class for every rule violation reported to a caller."""


class InvalidPlay(ScoutError):
    """The selected cards are neither a same-rank set nor a consecutive run."""


class PlayTooWeak(ScoutError):
    """The selected cards do not beat the play on the table."""


class IllegalAction(ScoutError):
    """Wrong seat, wrong phase, or an action the rules forbid right now."""


class ConfigurationError(ScoutError):
    """Unsupported number of players or rounds."""


__all__ = ["ScoutError", "InvalidPlay", "PlayTooWeak", "IllegalAction", "ConfigurationError"]
