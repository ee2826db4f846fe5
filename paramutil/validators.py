"""
Paramutil Parameter Validators

This module contains shape predicates for parameters arriving at API boundaries:
strings, identifiers, class names, positive integers, raw and duck-typed
containers, callables, object instances, homogeneous sets and I/O handles.

Every predicate returns the value itself (the same object, never a copy) when it
has the expected shape, and None when it does not. Predicates never raise for a
bad shape, so they compose with `or` and `is None` checks:

    >>> def rename(name=ABSENT, tags=ABSENT):
    ...     if validate_identifier(name) is None:
    ...         return None
    ...     tags = validate_array_ref0(tags) or []
    ...     return name, tags

Note that a successful result can still be falsy (an empty list accepted by
validate_array_ref0, the number 0 accepted by validate_string), so test results
with `is None` rather than truthiness. Use ensure() for a raising variant.

These validators check the **shape** of values. For content/format validation
raising exceptions, wrap a predicate with ensure().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import numbers
import re
import socket
import typing

from typing import Any, Callable, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import ABSENT
from .tools import fmt_type, fmt_value
from .values import Capability, Kind, ScalarRef, ValueView, is_defined, kind_of, safe_check

__all__ = [
    "HANDLE_BASES",
    "HANDLE_CHECKS",
    "ScalarRef",
    "ensure",
    "validate_array_like",
    "validate_array_ref",
    "validate_array_ref0",
    "validate_callable",
    "validate_can",
    "validate_class_name",
    "validate_code_ref",
    "validate_codelike",
    "validate_handle",
    "validate_hash_like",
    "validate_hash_ref",
    "validate_hash_ref0",
    "validate_identifier",
    "validate_instance",
    "validate_invocant",
    "validate_positive_integer",
    "validate_scalar_ref",
    "validate_scalar_ref0",
    "validate_set",
    "validate_set0",
    "validate_string",
]

# Constants ------------------------------------------------------------------------------------------------------------

T = TypeVar("T")

_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
_IDENTIFIER_RE = re.compile(_IDENTIFIER)
_CLASS_NAME_RE = re.compile(rf"{_IDENTIFIER}(?:::{_IDENTIFIER})*")
_POSITIVE_INTEGER_RE = re.compile(r"[1-9][0-9]*")

HANDLE_BASES: tuple[type, ...] = (io.IOBase, typing.IO, socket.socket)
"""Base types whose instances are handles. isinstance() is used, so ABC registration counts."""

_NATIVE_HANDLE_TYPES = (
    io.FileIO,
    io.BufferedReader,
    io.BufferedWriter,
    io.BufferedRandom,
    io.BufferedRWPair,
    io.TextIOWrapper,
    io.BytesIO,
    io.StringIO,
)


# Scalar Validators ----------------------------------------------------------------------------------------------------


def validate_string(value: Any = ABSENT) -> str | bytes | int | float | None:
    """
    Validate that a value is a plain string of non-zero length.

    Numbers count as strings, since their text form is never empty; they are
    not converted, so ints past the str() digit limit are accepted too. Length
    decides, not truthiness: '0' and 0 are valid strings, and so is any
    non-empty bytes value whatever its encoding. Callers that must reject '0'
    have to do so themselves.

    Returns:
        The value if it is a non-empty string, None otherwise.

    Examples:
        >>> validate_string("0")
        '0'
        >>> validate_string("") is None
        True
        >>> validate_string(["a"]) is None
        True
    """
    kind = kind_of(value)
    if kind is Kind.STRING:
        return value if len(value) > 0 else None
    if kind is Kind.NUMBER:
        return value
    return None


def validate_identifier(value: Any = ABSENT) -> str | None:
    """
    Validate that a value is an identifier: [A-Za-z_][A-Za-z0-9_]*.

    The match is anchored at both ends; a trailing newline does not slip through.

    Examples:
        >>> validate_identifier("_foo1")
        '_foo1'
        >>> validate_identifier("1foo") is None
        True
        >>> validate_identifier("foo\\n") is None
        True
    """
    return _match_text(_IDENTIFIER_RE, value)


def validate_class_name(value: Any = ABSENT) -> str | None:
    """
    Validate that a value is a class name: identifiers joined by '::'.

    Only the format is checked, not whether such a class exists. Leading or
    trailing separators and empty segments are rejected.

    Examples:
        >>> validate_class_name("Foo::Bar::Baz")
        'Foo::Bar::Baz'
        >>> validate_class_name("Foo")
        'Foo'
        >>> validate_class_name("::Foo") is None
        True
    """
    return _match_text(_CLASS_NAME_RE, value)


def validate_positive_integer(value: Any = ABSENT) -> str | bytes | int | float | None:
    """
    Validate that a value is a positive integer of any length.

    Strings must be digits only: no sign, no leading zero, no decimal point.
    Numbers are checked by value, not by text, so 42, 42.0 and Decimal("42.0")
    all pass while 1.5, inf and nan do not. Neither form is bounded to a
    machine word, and ints past the str() digit limit are accepted. Booleans
    are rejected.

    Examples:
        >>> validate_positive_integer("42")
        '42'
        >>> validate_positive_integer("007") is None
        True
        >>> validate_positive_integer(-1) is None
        True
    """
    if kind_of(value) is Kind.NUMBER:
        return value if _is_positive_integral(value) else None
    return _match_text(_POSITIVE_INTEGER_RE, value)


# Container Validators -------------------------------------------------------------------------------------------------


def validate_scalar_ref(value: Any = ABSENT, allow_empty: bool = False) -> Any:
    """
    Validate that a value is a raw ScalarRef.

    Unless allow_empty is set, the referenced value must be defined and must
    not be a zero-length string. ScalarRef subclasses are objects, not raw refs.

    Examples:
        >>> ref = ScalarRef("text")
        >>> validate_scalar_ref(ref) is ref
        True
        >>> validate_scalar_ref(ScalarRef("")) is None
        True
        >>> validate_scalar_ref(ScalarRef(""), allow_empty=True)
        ScalarRef(value='')
    """
    ref = ValueView(value).as_scalar_ref()
    if ref is None:
        return None
    if allow_empty:
        return ref
    target = ref.value
    if not is_defined(target):
        return None
    if isinstance(target, (str, bytes)) and not target:
        return None
    return ref


def validate_scalar_ref0(value: Any = ABSENT) -> Any:
    """Validate a raw ScalarRef, allowing empty content."""
    return validate_scalar_ref(value, allow_empty=True)


def validate_array_ref(value: Any = ABSENT, allow_empty: bool = False) -> list | tuple | None:
    """
    Validate that a value is a raw list or tuple.

    Subclasses are rejected, use validate_array_like() to accept them.
    Unless allow_empty is set, at least one element is required.

    Examples:
        >>> validate_array_ref([1])
        [1]
        >>> validate_array_ref([]) is None
        True
        >>> validate_array_ref([], allow_empty=True)
        []
    """
    array = ValueView(value).as_array()
    if array is None or (not allow_empty and len(array) == 0):
        return None
    return array


def validate_array_ref0(value: Any = ABSENT) -> list | tuple | None:
    """Validate a raw list or tuple, allowing it to be empty."""
    return validate_array_ref(value, allow_empty=True)


def validate_hash_ref(value: Any = ABSENT, allow_empty: bool = False) -> dict | None:
    """
    Validate that a value is a raw dict.

    Subclasses and other mappings are rejected, use validate_hash_like() to
    accept them. Unless allow_empty is set, at least one entry is required.

    Examples:
        >>> validate_hash_ref({"a": 1})
        {'a': 1}
        >>> validate_hash_ref({}) is None
        True
    """
    mapping = ValueView(value).as_hash()
    if mapping is None or (not allow_empty and len(mapping) == 0):
        return None
    return mapping


def validate_hash_ref0(value: Any = ABSENT) -> dict | None:
    """Validate a raw dict, allowing it to be empty."""
    return validate_hash_ref(value, allow_empty=True)


def validate_array_like(value: Any = ABSENT) -> Any:
    """
    Validate that a value can be used as an array.

    Accepts raw lists and tuples, and any object providing the 'array'
    capability: sequences, list subclasses, classes registered with
    collections.abc.Sequence, or types defining __getitem__ and __len__.
    Strings and mappings are not arrays. Emptiness is not checked.
    """
    view = ValueView(value)
    if view.kind() is Kind.ARRAY_REF or view.has_capability(Capability.ARRAY):
        return value
    return None


def validate_hash_like(value: Any = ABSENT) -> Any:
    """
    Validate that a value can be used as a mapping.

    Accepts raw dicts and any object providing the 'hash' capability:
    collections.abc.Mapping instances, dict subclasses, or types defining
    __getitem__, __len__, __iter__ and keys(). Emptiness is not checked.
    """
    view = ValueView(value)
    if view.kind() is Kind.HASH_REF or view.has_capability(Capability.HASH):
        return value
    return None


# Callable Validators --------------------------------------------------------------------------------------------------


def validate_code_ref(value: Any = ABSENT) -> Callable | None:
    """
    Validate that a value is a raw function.

    Plain functions, lambdas, builtin functions and bound methods pass.
    Objects that merely act callable (instances with __call__, classes,
    functools.partial) do not, see validate_callable().
    """
    return ValueView(value).as_callable()


def validate_callable(value: Any = ABSENT) -> Any:
    """
    Validate that a value can be called.

    Accepts everything validate_code_ref() accepts, plus objects providing
    the 'call' capability.

    Examples:
        >>> validate_callable(len)
        <built-in function len>
        >>> validate_callable("len") is None
        True
    """
    view = ValueView(value)
    if view.kind() is Kind.CODE_REF or view.has_capability(Capability.CALL):
        return value
    return None


validate_codelike = validate_callable


# Object Validators ----------------------------------------------------------------------------------------------------


def validate_invocant(value: Any = ABSENT) -> Any:
    """
    Validate that a value can receive a method call.

    Objects are invocants, and so is any string that is a valid class name:
    no check is made that such a class is loaded.

    Examples:
        >>> validate_invocant("Foo::Bar")
        'Foo::Bar'
        >>> validate_invocant("not a class") is None
        True
    """
    if kind_of(value) is Kind.OBJECT or validate_class_name(value) is not None:
        return value
    return None


def validate_instance(value: Any = ABSENT, class_name: type | str = ABSENT) -> Any:
    """
    Validate that a value is an object of a particular class.

    The class matches if it is the value's own class or any ancestor, through
    every branch of a multiple-inheritance hierarchy.

    Args:
        value: The value to check.
        class_name: A class, tested with isinstance() so ABC registration counts,
            or a name. A name matches an ancestor's short name, qualified name or
            module-qualified name, with '.' or '::' as separator.

    Returns:
        The value if it is an instance of the class, None otherwise. An unusable
        class_name is a no match, not an error.

    Examples:
        >>> class Base: ...
        >>> class Derived(Base): ...
        >>> obj = Derived()
        >>> validate_instance(obj, "Base") is obj
        True
        >>> validate_instance(obj, int) is None
        True
    """
    return value if ValueView(value).isa(class_name) else None


def validate_set(members: Any = ABSENT, class_name: type | str = ABSENT, allow_empty: bool = False) -> list | tuple | None:
    """
    Validate that a value is a raw list or tuple of instances of one class.

    Every element is checked against the same class_name with
    validate_instance(); a single mismatch rejects the whole set.

    Examples:
        >>> class Item: ...
        >>> items = [Item(), Item()]
        >>> validate_set(items, "Item") is items
        True
        >>> validate_set(items + [1], "Item") is None
        True
        >>> validate_set([], "Item", allow_empty=True)
        []
    """
    array = validate_array_ref(members, allow_empty=allow_empty)
    if array is None:
        return None
    for member in array:
        if validate_instance(member, class_name) is None:
            return None
    return array


def validate_set0(members: Any = ABSENT, class_name: type | str = ABSENT) -> list | tuple | None:
    """Validate a set of instances of one class, allowing it to be empty."""
    return validate_set(members, class_name, allow_empty=True)


def validate_can(value: Any = ABSENT, method: str = ABSENT) -> Any:
    """
    Validate that an object has a callable attribute with the given name.

    Only objects qualify; class-name strings are not resolved. The attribute
    is looked up on the object, so properties and __getattr__ hooks run; if
    they raise, the value is rejected with a RuntimeWarning.

    Examples:
        >>> validate_can([].__class__, "append")
        <class 'list'>
        >>> validate_can(object(), "append") is None
        True
    """
    if kind_of(value) is not Kind.OBJECT or validate_identifier(method) is None:
        return None

    def has_method(obj: Any) -> bool:
        return callable(getattr(obj, method, None))

    return value if safe_check(has_method, value) else None


# Handle Validators ----------------------------------------------------------------------------------------------------


def _is_native_handle(value: Any) -> bool:
    """File objects created by the interpreter itself: open(), BytesIO, sys.stdout."""
    return type(value) in _NATIVE_HANDLE_TYPES


def _is_handle_instance(value: Any) -> bool:
    view = ValueView(value)
    return any(view.isa(base) for base in HANDLE_BASES)


def _emulates_handle(value: Any) -> bool:
    return ValueView(value).has_capability(Capability.HANDLE)


HANDLE_CHECKS: tuple[Callable[[Any], bool], ...] = (
    _is_native_handle,
    _is_handle_instance,
    _emulates_handle,
)
"""Default handle detection policy, tried in order."""


def validate_handle(value: Any = ABSENT, checks: tuple[Callable[[Any], bool], ...] = HANDLE_CHECKS) -> Any:
    """
    Validate that a value behaves as an I/O handle.

    Handle detection is heuristic: there is no single protocol every file-like
    object follows. The default policy accepts, in order:

        1. Native file objects (open() results, io.BytesIO, sys.stdin).
        2. Instances of HANDLE_BASES, including io.IOBase subclasses and
           classes registered with io.IOBase.
        3. Objects providing the 'handle' capability: a callable close() plus
           read() or write(), e.g. tempfile.NamedTemporaryFile wrappers.

    Only objects are considered, so paths and file descriptors are never
    handles. Whether the handle is still open is not checked.

    Args:
        value: The value to check.
        checks: Ordered one-argument predicates replacing the default policy.
            A check that raises counts as failed and emits a RuntimeWarning.

    Returns:
        The value if any check passes, None otherwise.
    """
    if kind_of(value) is not Kind.OBJECT:
        return None
    for check in checks:
        if safe_check(check, value):
            return value
    return None


# Assertions -----------------------------------------------------------------------------------------------------------


def ensure(check: Callable[..., T], value: Any = ABSENT, *args: Any, name: str = "value", **kwargs: Any) -> T:
    """
    Run a predicate and raise if it does not match.

    Args:
        check: A predicate from this module (or any function following the
            same value-or-None convention).
        value: The value to validate.
        *args: Extra positional arguments for the predicate, e.g. a class name.
        name: Parameter name used in the error message.
        **kwargs: Extra keyword arguments for the predicate, e.g. allow_empty.

    Returns:
        The predicate's result.

    Raises:
        TypeError: If check is not callable.
        ValueError: If the predicate returns None.

    Examples:
        >>> ensure(validate_positive_integer, "42")
        '42'
        >>> ensure(validate_positive_integer, "-1", name="count")
        Traceback (most recent call last):
            ...
        ValueError: count failed validate_positive_integer: <str: '-1'>
    """
    if not callable(check):
        raise TypeError(f"check must be callable, got {fmt_type(check)}")

    result = check(value, *args, **kwargs)
    if result is None:
        check_name = getattr(check, "__name__", type(check).__name__)
        raise ValueError(f"{name} failed {check_name}: {fmt_value(value)}")
    return result


# Private Methods ------------------------------------------------------------------------------------------------------


def _text_form(value: Any) -> str | None:
    """
    Return the string a scalar is matched as, or None for non-scalars.

    Bytes are decoded as ASCII; non-ASCII bytes have no text form.
    """
    kind = kind_of(value)
    if kind is Kind.STRING:
        if isinstance(value, bytes):
            try:
                return value.decode("ascii")
            except UnicodeDecodeError:
                return None
        return str.__str__(value)
    if kind is Kind.NUMBER:
        try:
            return str(value)
        except ValueError:
            # int beyond sys.get_int_max_str_digits()
            return None
    return None


def _match_text(pattern: re.Pattern, value: Any) -> Any:
    text = _text_form(value)
    if text and pattern.fullmatch(text):
        return value
    return None


def _is_positive_integral(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    if isinstance(value, numbers.Integral):
        return value > 0
    try:
        return value > 0 and value == int(value)
    except (ArithmeticError, ValueError):
        # inf, nan and signalling Decimal comparisons
        return False
