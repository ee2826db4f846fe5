"""
Sentinel object for distinguishing a value that was never supplied from None.

Every predicate in paramutil defaults its value parameter to ABSENT, so calling
a predicate with no argument at all is a regular "no match" rather than a
TypeError. Identity checks (using 'is') are the only supported comparison.

Sentinels:
    ABSENT: Represents a value that was not supplied (distinguishes from None)

Example:
    >>> def lookup(key: str | AbsentType = ABSENT) -> str | None:
    ...     if key is ABSENT:
    ...         return None
    ...     return key.upper()
"""

from typing import Any, Final

__all__ = [
    'ABSENT',
    'AbsentType',
    'is_absent',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class AbsentType:
    """
    Sentinel type for ABSENT.

    Marks an argument that the caller did not supply at all. It is falsy,
    compares equal only to itself and survives pickling and copying as the
    same singleton.
    """
    __slots__ = ()

    _instance: 'AbsentType | None' = None

    def __new__(cls) -> 'AbsentType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<ABSENT>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

ABSENT: Final[AbsentType] = AbsentType()
"""
Sentinel representing a value that was not supplied.

Use with identity check: `if value is ABSENT:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def is_absent(value: Any) -> bool:
    """Return True if value is the ABSENT sentinel."""
    return value is ABSENT
