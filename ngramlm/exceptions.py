"""Errors raised by the n-gram language model."""


class EmptyModelError(RuntimeError):
    """Raised when sampling from a model that never observed a context."""
