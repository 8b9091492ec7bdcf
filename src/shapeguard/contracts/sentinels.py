"""Sentinel for "no value at this key".

Python has a single null (``None``) where the guards need two: a key that
holds ``None`` and a key that is absent. ``UNDEFINED`` is the second one.
"""

from typing import Final


class _Undefined:
    """Type of the UNDEFINED singleton."""

    __slots__ = ()

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> "_Undefined":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()
