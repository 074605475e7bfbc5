"""
Error taxonomy for the engine.

- ConfigurationError: the game was set up in a way that can never run
- InvariantViolation: a programming defect (bad action reached the board)
- ChannelClosed: the interactive input source went away mid-selection

Policies with no evaluation logic raise the builtin NotImplementedError.
"""


class DraughtsimError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(DraughtsimError):
    """Raised before play starts when the game cannot be run as configured."""


class InvariantViolation(DraughtsimError):
    """Raised when the board is asked to do something no legal move allows."""


class ChannelClosed(DraughtsimError):
    """Raised when the selection channel closes while a selection is pending."""
