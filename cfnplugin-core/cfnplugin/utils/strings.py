from typing import Optional, Union

from cfnplugin.config import DEFAULT_ENCODING


def to_str(obj: Union[str, bytes], encoding: str = DEFAULT_ENCODING, errors="strict") -> str:
    """Decodes ``obj`` if it is ``bytes``, a ``str`` is returned unchanged."""
    return obj.decode(encoding, errors) if isinstance(obj, bytes) else obj


def to_bytes(obj: Union[str, bytes], encoding: str = DEFAULT_ENCODING, errors="strict") -> bytes:
    """Encodes ``obj`` if it is a ``str``, ``bytes`` are returned unchanged."""
    return obj.encode(encoding, errors) if isinstance(obj, str) else obj


def to_body(obj: Optional[Union[str, bytes, bytearray]]) -> bytes:
    """Normalizes a raw property body into an immutable byte string, ``None`` becomes ``b""``."""
    if obj is None:
        return b""
    if isinstance(obj, bytearray):
        return bytes(obj)
    return to_bytes(obj)


def truncate(data: str, max_length: int = 100) -> str:
    data = str(data or "")
    return ("%s..." % data[:max_length]) if len(data) > max_length else data
