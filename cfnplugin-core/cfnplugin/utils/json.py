import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .strings import to_str

LOG = logging.getLogger(__name__)


class BytesEncoder(json.JSONEncoder):
    """Helper class that converts JSON documents with bytes"""

    def default(self, obj):
        if isinstance(obj, bytes):
            return to_str(obj, errors="replace")
        return super().default(obj)


class FrozenList(tuple):
    """Read-only list inside a frozen JSON document, serialized as a JSON array."""

    def __repr__(self):
        return f"FrozenList({list(self)!r})"


def clone(item):
    return json.loads(json.dumps(item))


def canonical_json(item: Any) -> bytes:
    """Serializes the given JSON-compatible object into compact UTF-8 bytes."""
    return json.dumps(item, separators=(",", ":"), cls=BytesEncoder).encode("utf-8")


def freeze_json(item: Any) -> Any:
    """
    Returns a read-only view of a JSON document: objects become ``MappingProxyType`` and arrays become
    ``FrozenList``, at every level.
    """
    if isinstance(item, Mapping):
        return MappingProxyType({key: freeze_json(value) for key, value in item.items()})
    if isinstance(item, list):
        return FrozenList(freeze_json(value) for value in item)
    return item


def thaw_json(item: Any) -> Any:
    """Inverse of ``freeze_json``, returns a mutable copy made of plain dicts and lists."""
    if isinstance(item, MappingProxyType):
        return {key: thaw_json(value) for key, value in item.items()}
    if isinstance(item, FrozenList):
        return [thaw_json(value) for value in item]
    if isinstance(item, dict):
        return {key: thaw_json(value) for key, value in item.items()}
    if isinstance(item, list):
        return [thaw_json(value) for value in item]
    return item


def ensure_json_mapping(item: Any, name: str = "mapping") -> Mapping[str, Any]:
    """
    Checks that ``item`` is a mapping with string keys which survives a JSON round trip unchanged, and returns a
    frozen deep copy of it (see ``freeze_json``). Raises a ``ValueError`` otherwise.

    :param item: the mapping to check, ``None`` is treated as an empty mapping. May itself be frozen.
    :param name: name of the value, used in error messages
    :return: the frozen copy
    """
    if item is None:
        return MappingProxyType({})
    if not isinstance(item, Mapping):
        raise ValueError(f"{name} must be a mapping, got {type(item).__name__}")
    for key in item:
        if not isinstance(key, str):
            raise ValueError(f"{name} keys must be strings, got {key!r}")
    item = thaw_json(dict(item))
    try:
        copied = clone(item)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} is not JSON serializable: {e}") from e
    if copied != item:
        raise ValueError(f"{name} does not survive a JSON round trip unchanged")
    return freeze_json(copied)
