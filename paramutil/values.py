"""
Value model shared by all paramutil predicates.

Classifies an arbitrary Python value into a structural Kind, exposes its nominal
type and ancestry, and answers capability queries ("does this object behave like
an array / mapping / callable / handle") through a registry of named checks.

Raw built-in shapes and duck-typed objects are kept apart on purpose: an exact
list is an ARRAY_REF, while a list subclass is an OBJECT that provides the
'array' capability.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import numbers
import types
import warnings

from collections import deque
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Callable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import ABSENT
from .tools import fmt_type, fmt_value
from .utils import type_names

__all__ = [
    "Capability",
    "Kind",
    "ScalarRef",
    "ValueView",
    "ancestry",
    "capabilities",
    "has_capability",
    "is_defined",
    "kind_of",
    "register_capability",
    "safe_check",
]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(str, Enum):
    """
    Structural variant of an inspected value.

    Members are str subclasses, so they compare equal to their plain names.
    """
    ABSENT = "absent"
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    SCALAR_REF = "scalar_ref"
    ARRAY_REF = "array_ref"
    HASH_REF = "hash_ref"
    CODE_REF = "code_ref"
    OBJECT = "object"


@unique
class Capability(str, Enum):
    """Built-in capability names understood by has_capability()."""
    ARRAY = "array"
    HASH = "hash"
    CALL = "call"
    HANDLE = "handle"


@dataclass(eq=False)
class ScalarRef:
    """
    A reference to a single value.

    Python has no scalar references, so this one-slot box stands in for them.
    Identity semantics: two refs to equal values are still different refs.

    Attributes:
        value: The referenced value. Defaults to None.
    """
    value: Any = None


class ValueView:
    """
    Read-only view over an inspected value.

    The kind is computed once on construction; every other query dispatches on it.
    Structural accessors return the original object only when the kind matches
    exactly, and None otherwise. Nothing is copied or coerced.

    Examples:
        >>> view = ValueView([1, 2])
        >>> view.kind()
        <Kind.ARRAY_REF: 'array_ref'>
        >>> view.as_array()
        [1, 2]
        >>> view.as_hash() is None
        True
    """
    __slots__ = ("value", "_kind")

    def __init__(self, value: Any = ABSENT) -> None:
        self.value = value
        self._kind = kind_of(value)

    def __repr__(self) -> str:
        return f"ValueView({self._kind.value}, {fmt_value(self.value)})"

    def kind(self) -> Kind:
        return self._kind

    def is_defined(self) -> bool:
        return self._kind not in (Kind.ABSENT, Kind.NULL)

    def nominal_type(self) -> type | None:
        """Return the class of an OBJECT value, None for every other kind."""
        return type(self.value) if self._kind is Kind.OBJECT else None

    def has_capability(self, name: str) -> bool:
        """Query the capability registry; non-objects never have capabilities."""
        return self._kind is Kind.OBJECT and has_capability(self.value, name)

    def ancestry(self) -> Iterator[type]:
        """Yield the nominal type and all its ancestors, or nothing for non-objects."""
        if self._kind is Kind.OBJECT:
            yield from ancestry(type(self.value))

    def isa(self, cls: type | str) -> bool:
        """
        Check nominal class membership of an OBJECT value.

        A class is tested with isinstance(), so ABC virtual subclasses count.
        A name is matched against every ancestor, see utils.type_names().
        Anything else is simply not a match.
        """
        if self._kind is not Kind.OBJECT:
            return False
        if isinstance(cls, type):
            return safe_check(isinstance, self.value, cls)
        if not isinstance(cls, str) or not cls:
            return False
        return any(cls in type_names(base) for base in self.ancestry())

    def as_scalar_ref(self) -> ScalarRef | None:
        return self.value if self._kind is Kind.SCALAR_REF else None

    def as_array(self) -> list | tuple | None:
        return self.value if self._kind is Kind.ARRAY_REF else None

    def as_hash(self) -> dict | None:
        return self.value if self._kind is Kind.HASH_REF else None

    def as_callable(self) -> Callable | None:
        return self.value if self._kind is Kind.CODE_REF else None


# Methods --------------------------------------------------------------------------------------------------------------

_ARRAY_TYPES = (list, tuple)
_CODE_TYPES = (types.FunctionType, types.BuiltinFunctionType, types.MethodType)


def kind_of(value: Any) -> Kind:
    """
    Classify a value into its structural Kind.

    Containers and functions must be of the exact built-in type; subclasses
    are OBJECTs. Strings and numbers are classified by isinstance, since their
    subclasses still behave as plain scalars.

    Examples:
        >>> kind_of("abc")
        <Kind.STRING: 'string'>
        >>> kind_of({"a": 1})
        <Kind.HASH_REF: 'hash_ref'>
        >>> kind_of(len)
        <Kind.CODE_REF: 'code_ref'>
    """
    if value is ABSENT:
        return Kind.ABSENT
    if value is None:
        return Kind.NULL

    value_type = type(value)
    if value_type in _ARRAY_TYPES:
        return Kind.ARRAY_REF
    if value_type is dict:
        return Kind.HASH_REF
    if value_type is ScalarRef:
        return Kind.SCALAR_REF
    if value_type in _CODE_TYPES:
        return Kind.CODE_REF
    if isinstance(value, (str, bytes)):
        return Kind.STRING
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    return Kind.OBJECT


def is_defined(value: Any) -> bool:
    """Return True unless value is ABSENT or None."""
    return value is not ABSENT and value is not None


def ancestry(cls: type) -> Iterator[type]:
    """
    Walk the inheritance graph of a class breadth-first.

    Every class is yielded once, so diamond hierarchies are not re-traversed,
    and all base branches are visited, not only the first one.

    Examples:
        >>> class A: ...
        >>> class B(A): ...
        >>> class C(A): ...
        >>> class D(B, C): ...
        >>> [c.__name__ for c in ancestry(D)]
        ['D', 'B', 'C', 'A', 'object']
    """
    seen = {cls}
    queue = deque([cls])
    while queue:
        current = queue.popleft()
        yield current
        for base in getattr(current, "__bases__", ()):
            if base not in seen:
                seen.add(base)
                queue.append(base)


# Capabilities ---------------------------------------------------------------------------------------------------------

CapabilityCheck = type | Callable[[Any], bool]


def _is_textual(obj: Any) -> bool:
    return isinstance(obj, (str, bytes, bytearray))


def _type_defines(obj: Any, *names: str) -> bool:
    """Check the class, not the instance, so __getattr__ hooks are not triggered."""
    cls = type(obj)
    return all(getattr(cls, name, None) is not None for name in names)


def _provides_array(obj: Any) -> bool:
    if _is_textual(obj) or isinstance(obj, abc.Mapping):
        return False
    if isinstance(obj, abc.Sequence):
        return True
    return _type_defines(obj, "__getitem__", "__len__") and not _type_defines(obj, "keys")


def _provides_hash(obj: Any) -> bool:
    if isinstance(obj, abc.Mapping):
        return True
    return _type_defines(obj, "__getitem__", "__len__", "__iter__", "keys")


def _provides_handle(obj: Any) -> bool:
    if isinstance(obj, (type, types.ModuleType)):
        return False
    # Instance lookup: file wrappers delegate through __getattr__
    if not callable(getattr(obj, "close", None)):
        return False
    return callable(getattr(obj, "read", None)) or callable(getattr(obj, "write", None))


_capabilities: dict[str, tuple[CapabilityCheck, ...]] = {
    Capability.ARRAY.value: (_provides_array,),
    Capability.HASH.value: (_provides_hash,),
    Capability.CALL.value: (callable,),
    Capability.HANDLE.value: (_provides_handle,),
}


def register_capability(name: str, check: CapabilityCheck) -> None:
    """
    Register an additional check for a named capability.

    Checks for a name are tried in registration order and the capability is
    provided if any of them passes. Unknown names create a new capability.

    Args:
        name: Capability name, e.g. "array" or a new one such as "async_iter".
        check: A class (tested with isinstance, so ABCs and Protocols marked
            runtime_checkable work) or a one-argument predicate.

    Raises:
        TypeError: If name is not a string or check is neither a class nor callable.
        ValueError: If name is empty.

    Examples:
        >>> register_capability("async_iter", abc.AsyncIterable)
        >>> class Stream:
        ...     def __aiter__(self): ...
        >>> has_capability(Stream(), "async_iter")
        True
    """
    if not isinstance(name, str):
        raise TypeError(f"capability name must be a string, got {fmt_type(name)}")
    if not name:
        raise ValueError("capability name cannot be empty")
    if not (isinstance(check, type) or callable(check)):
        raise TypeError(f"capability check must be a class or callable, got {fmt_type(check)}")

    key = _capability_key(name)
    # Replace the tuple rather than mutate it, readers never see a partial update
    _capabilities[key] = _capabilities.get(key, ()) + (check,)


def has_capability(obj: Any, name: str) -> bool:
    """
    Return True if obj provides the named capability.

    A check that raises is treated as "not provided" and reported with a
    RuntimeWarning. Unknown capability names are never provided.
    """
    for check in _capabilities.get(_capability_key(name), ()):
        if isinstance(check, type):
            if safe_check(isinstance, obj, check):
                return True
        elif safe_check(check, obj):
            return True
    return False


def capabilities(obj: Any) -> frozenset[str]:
    """Return the names of every registered capability obj provides."""
    return frozenset(name for name in tuple(_capabilities) if has_capability(obj, name))


def _capability_key(name: str) -> str:
    return name.value if isinstance(name, Capability) else name


def safe_check(check: Callable, *args: Any) -> bool:
    try:
        return bool(check(*args))
    except Exception as e:
        warnings.warn(
            f"check {getattr(check, '__name__', check)!r} raised {type(e).__name__} "
            f"for {fmt_value(args[0], max_repr=60)}, treated as no match",
            RuntimeWarning,
            stacklevel=3,
        )
        return False
