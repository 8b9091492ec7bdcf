"""Exceptions raised by shapeguard.

Only programmer errors raise. A value that fails a guard or a schema is a
verdict (False, or MatchResult.errors), never an exception.
"""


class ShapeguardError(Exception):
    """Base exception for shapeguard errors."""

    pass


class SchemaError(ShapeguardError):
    """Raised at build time when a guard schema is malformed.

    Example: a field validator that is not callable, or a plugin name that
    is not registered.
    """

    pass


class GuardError(ShapeguardError):
    """Raised by ``Guard.expect`` when the guard rejects the value."""

    def __init__(self, message: str, *, guard_name: str, value: object) -> None:
        super().__init__(message)
        self.guard_name = guard_name
        self.value = value


class SchemaSyntaxError(ShapeguardError):
    """Raised when schema text cannot be parsed.

    position is the character offset in the schema text where the problem
    was detected, or None when it applies to the whole text.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position

    def __str__(self) -> str:
        message = super().__str__()
        if self.position is None:
            return message
        return f"{message} (at offset {self.position})"
