"""Exceptions raised by the generator."""

from __future__ import annotations


class ApigenError(Exception):
    """Base class for all generator errors."""


class NotFound(ApigenError, LookupError):
    """A path, or a method under a present path, is not in the descriptor."""

    def __init__(self, path: str, method: str | None = None) -> None:
        self.path = path
        self.method = method
        if method is None:
            message = f"Path {path} not found"
        else:
            message = f"Method {method} not found for path {path}"
        super().__init__(message)


class DescriptorError(ApigenError, ValueError):
    """The descriptor could not be read, parsed or validated."""


class NameCollisionError(ApigenError):
    """Several operations map to the same generated client method name."""

    def __init__(self, collisions: dict[str, list[tuple[str, str]]]) -> None:
        self.collisions = collisions
        details = "; ".join(
            f"{name}: " + ", ".join(f"{method.upper()} {path}" for method, path in pairs)
            for name, pairs in collisions.items()
        )
        super().__init__(f"Client method name collisions: {details}")
