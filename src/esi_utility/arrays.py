"""Array (collection) helpers.

Small, stateless helpers for working with Python's built-in containers:
flattening nested structures, safe key/value lookups, grouping, interlacing
and a cycle-safe deep map.

``map_deep`` is the one routine here with a non-obvious invariant. It walks
an arbitrarily nested graph of sequences, mappings and plain objects and
applies a callback to every leaf. Containers are tracked by identity while
they are *on the current recursion path* only, so:

- a back-reference to an ancestor (a cycle) is returned untouched, and
- a shared but acyclic child (a "diamond") is processed once per path.

The identity set is created per top-level call and passed down explicitly;
there is no module-level state.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from types import ModuleType
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Text-like sequences are always leaves.
_TEXT_TYPES = (str, bytes, bytearray)


# ============================================================================
#                               Lookups
# ============================================================================


def key_exists(array: Any, key: Any) -> bool:
    """Return True if ``key`` is present in ``array``.

    Mappings are checked with ``in``. Sequences accept non-negative integer
    indexes below their length. Any other object supporting ``in`` (an
    ``ArrayAccess``-style container) is checked with ``in`` as well.

    Raises:
        TypeError: If ``array`` supports none of the above.
    """
    if isinstance(array, Mapping):
        return key in array
    if isinstance(array, Sequence) and not isinstance(array, _TEXT_TYPES):
        return (
            isinstance(key, int)
            and not isinstance(key, bool)
            and 0 <= key < len(array)
        )
    if hasattr(array, "__contains__"):
        return key in array
    raise TypeError(f"Expected a mapping or sequence, got {type(array).__name__}")


def get_value(array: Any, key: Any, default: Any = None) -> Any:
    """Return ``array[key]`` if the key exists, otherwise ``default``."""
    if key_exists(array, key):
        return array[key]
    return default


def set_value(array: Any, key: Any, value: Any) -> Any:
    """Assign ``value`` at ``key`` and return the container.

    When ``key`` is ``None`` the whole container is replaced: ``value`` itself
    is returned and ``array`` is left untouched.
    """
    if key is None:
        return value
    array[key] = value
    return array


def value_exists(array: Mapping[Any, Any] | Iterable[Any], value: Any) -> bool:
    """Strict membership test.

    A match requires equal value *and* identical type, so ``1`` does not match
    ``True``, ``1.0`` or ``"1"``. Mappings are searched by value.
    """
    values = array.values() if isinstance(array, Mapping) else array
    return any(type(item) is type(value) and item == value for item in values)


# ============================================================================
#                               Reshaping
# ============================================================================


def _is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _items(array: Mapping[Any, Any] | Sequence[Any]) -> Iterable[tuple[Any, Any]]:
    if isinstance(array, Mapping):
        return array.items()
    return enumerate(array)


def flatten(
    array: Mapping[Any, Any] | Sequence[Any], separator: str = ".", prepend: str = ""
) -> dict[str, Any]:
    """Flatten a nested structure of mappings and lists into a single dict.

    Nested keys are joined with ``separator``; list positions are used as keys.

    Example:
        >>> flatten(["a", {"first": "b", "more": ["c"]}])
        {'0': 'a', '1.first': 'b', '1.more.0': 'c'}

    Args:
        array: The mapping or list to flatten.
        separator: Joins parent and child keys.
        prepend: Prefix applied to every top-level key.

    Returns:
        dict[str, Any]: Flat mapping of joined key paths to leaf values.
    """
    result: dict[str, Any] = {}

    for key, value in _items(array):
        current_key = f"{prepend}{key}"

        if _is_nested(value):
            result.update(flatten(value, separator, current_key + separator))
            continue

        result[current_key] = value

    return result


def group_by(items: Iterable[Mapping[str, Any]], key: str) -> dict[Any, list[Mapping[str, Any]]]:
    """Group mappings by the value they hold under ``key``.

    Items lacking ``key`` (or holding ``None`` there) are skipped, so an
    unknown key yields an empty dict. Groups keep first-seen order.
    """
    result: dict[Any, list[Mapping[str, Any]]] = {}

    for item in items:
        group_key = item.get(key) if isinstance(item, Mapping) else None
        if group_key is None:
            continue
        result.setdefault(group_key, []).append(item)

    return result


def interlace(*arrays: Iterable[T] | Mapping[Any, T]) -> list[T] | None:
    """Interleave the values of one or more collections (keys are discarded).

    Example:
        >>> interlace([1, 2, 3], ["a", "b", "c"])
        [1, 'a', 2, 'b', 3, 'c']

    Shorter inputs simply drop out once exhausted.

    Returns:
        The interleaved list, or ``None`` when called without arguments.
    """
    if not arrays:
        return None

    columns = [list(a.values()) if isinstance(a, Mapping) else list(a) for a in arrays]

    if len(columns) == 1:
        return columns[0]

    max_length = max(len(column) for column in columns)

    return [
        column[i] for i in range(max_length) for column in columns if i < len(column)
    ]


def is_associative(array: Mapping[Any, Any] | Sequence[Any]) -> bool:
    """Return True if ``array`` is a mapping whose keys are not exactly ``0..n-1``."""
    if not array or not isinstance(array, Mapping):
        return False
    return list(array.keys()) != list(range(len(array)))


# ============================================================================
#                               Deep map
# ============================================================================


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_record_object(value: Any) -> bool:
    """True for plain objects whose public attributes should be mapped."""
    if _is_dataclass_instance(value):
        return True
    return (
        hasattr(value, "__dict__")
        and not isinstance(value, (type, ModuleType, Enum))
        and not callable(value)
    )


def _is_container(value: Any) -> bool:
    if isinstance(value, _TEXT_TYPES):
        return False
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return _is_record_object(value)


def _rebuild_tuple(original: tuple[Any, ...], items: list[Any]) -> tuple[Any, ...]:
    if hasattr(original, "_fields"):  # namedtuple
        return type(original)(*items)
    return type(original)(items)


def map_deep(data: Any, callback: Callable[[Any], Any]) -> Any:
    """Recursively apply ``callback`` to every leaf of ``data``.

    Containers:
        - ``list``/``tuple``: a new container of the same type, same order.
        - mappings: a new ``dict`` with the same keys, same order.
        - plain objects (anything with an instance ``__dict__`` that is not a
          class, module, enum member or callable): public attributes are
          reassigned **in place** and the same object is returned.
        - dataclass instances: public fields are mapped. Frozen ones are
          rebuilt with :func:`dataclasses.replace`, others updated in place.

    Everything else (``str``, ``bytes``, numbers, ``None``, sets, slotted
    non-dataclass objects, ...) is a leaf and is passed to ``callback``.

    Cycles:
        A container met again while it is still being processed (a
        back-reference to an ancestor) is returned unmodified. A container
        reachable through two separate, non-cyclic paths is processed once per
        path, so ``callback`` must be safe to apply more than once to such
        values.

    Errors raised by ``callback`` propagate unchanged; no partial result is
    returned.

    Example:
        >>> import html
        >>> map_deep(["<", "abc", [">"]], html.escape)
        ['&lt;', 'abc', ['&gt;']]

    Args:
        data: Any value.
        callback: One-argument function applied to each leaf.

    Returns:
        A structure of the same shape with every leaf transformed.
    """
    return _map_deep(data, callback, set())


def _map_deep(data: Any, callback: Callable[[Any], Any], seen: set[int]) -> Any:
    if not _is_container(data):
        return callback(data)

    marker = id(data)
    if marker in seen:
        logger.debug(
            "map_deep: back-reference to %s at %#x left untouched",
            type(data).__name__,
            marker,
        )
        return data

    seen.add(marker)
    try:
        if isinstance(data, Mapping):
            return {key: _map_deep(value, callback, seen) for key, value in data.items()}

        if isinstance(data, (list, tuple)):
            mapped = [_map_deep(item, callback, seen) for item in data]
            return mapped if isinstance(data, list) else _rebuild_tuple(data, mapped)

        if _is_dataclass_instance(data):
            return _map_dataclass(data, callback, seen)

        for name, value in list(vars(data).items()):
            if name.startswith("_"):
                continue
            setattr(data, name, _map_deep(value, callback, seen))
        return data
    finally:
        seen.discard(marker)


def _map_dataclass(data: Any, callback: Callable[[Any], Any], seen: set[int]) -> Any:
    """Map the public fields of a dataclass instance.

    Frozen instances are rebuilt with :func:`dataclasses.replace`; their
    ``init=False`` fields cannot be passed to it and keep their values.
    Other instances are updated in place, slotted or not.
    """
    fields = [field for field in dataclasses.fields(data) if not field.name.startswith("_")]

    if data.__dataclass_params__.frozen:
        changes = {
            field.name: _map_deep(getattr(data, field.name), callback, seen)
            for field in fields
            if field.init
        }
        return dataclasses.replace(data, **changes)

    for field in fields:
        setattr(data, field.name, _map_deep(getattr(data, field.name), callback, seen))
    return data
