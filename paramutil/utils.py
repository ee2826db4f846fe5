"""
Paramutil utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    name = getattr(cls, "__qualname__", cls.__name__)

    if cls.__module__ == "builtins":
        return f"builtins.{name}" if fully_qualified_builtins else name
    return f"{cls.__module__}.{name}" if fully_qualified else name


def type_names(cls: type) -> frozenset[str]:
    """
    Return every name a class can be referred to by in a nominal check.

    A class answers to its short name, its qualified name (nested classes) and
    its module-qualified name. Both '.' and '::' separated spellings are included.

    Examples:
        >>> sorted(type_names(int))
        ['builtins.int', 'builtins::int', 'int']
    """
    names = {
        cls.__name__,
        class_name(cls),
        class_name(cls, fully_qualified=True, fully_qualified_builtins=True),
    }
    return frozenset(names | {name.replace(".", "::") for name in names})
