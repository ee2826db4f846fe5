#
# Paramutil Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

__all__ = ["fmt_type", "fmt_value"]


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120, show_module: bool = False) -> str:
    """Format type information for warnings and exception messages.

    Args:
        obj: Any Python object or type to extract type information from.
        max_repr: Maximum length before truncation (applies to full type name).
        show_module: Whether to include module name (e.g., "collections.OrderedDict" vs "OrderedDict").

    Returns:
        Formatted type string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
        >>> fmt_type(ValueError("test"))
        '<type: ValueError>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)

    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    if show_module:
        module_name = getattr(target_type, "__module__", None)
        if module_name and module_name != "builtins":
            type_name = f"{module_name}.{type_name}"

    return f"<type: {_fmt_truncate(type_name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for warnings and exception messages.

    Handles broken __repr__ and very long representations. Inner ">" is escaped
    so the wrapper brackets stay unambiguous.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hell'...>"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate s to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes and get the ellipsis outside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner_budget = max(1, max_len - 4)
        inner = s[1:1 + inner_budget]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis
