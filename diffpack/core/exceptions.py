"""Comparison subsystem exceptions."""


class DiffError(Exception):
    """Base class for diffkit errors."""


class DiffConfigError(DiffError):
    """Raised when comparison options or a config file are malformed."""


class UnsupportedKindError(DiffError):
    """Raised when a value kind has no walker or renderer rule."""
