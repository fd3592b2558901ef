"""
Conversion between the raw JSON property bodies sent by the orchestrator and the typed models of a resource
handler. Models can be anything pydantic can validate: ``BaseModel`` subclasses, (pydantic) dataclasses,
``TypedDict`` classes, or plain ``dict``.

The orchestrator transmits primitive property values as strings (``"true"``, ``"10"``). Decoding runs in
pydantic's lax mode, which converts such values into ``bool``, ``int`` or ``float`` fields of the model.
"""
import functools
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from cfnplugin.utils.json import canonical_json
from cfnplugin.utils.strings import truncate

from .errors import BODY_EMPTY, MARSHALING, CfnError

LOG = logging.getLogger(__name__)

T = TypeVar("T")


@functools.lru_cache(maxsize=128)
def get_type_adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def decode(
    body: bytes,
    model: Type[T],
    *,
    allow_empty: bool = False,
    empty_message: str = "Body is empty",
    error_class: Type[CfnError] = CfnError,
) -> Optional[T]:
    """
    Decodes the given JSON body into a new instance of ``model``.

    :param body: the raw property body
    :param model: the target model type
    :param allow_empty: if set, an empty body decodes to ``None`` instead of raising ``BodyEmpty``
    :param empty_message: message of the ``BodyEmpty`` error
    :param error_class: the ``CfnError`` subclass to raise
    :return: the decoded model instance, or ``None`` for an allowed empty body
    :raises CfnError: with code ``BodyEmpty`` if the body is empty and not allowed to be, or ``Marshaling`` if the
        body cannot be converted into the model
    """
    if not body:
        if allow_empty:
            return None
        raise error_class(BODY_EMPTY, empty_message)

    try:
        return get_type_adapter(model).validate_json(body)
    except (ValidationError, UnicodeDecodeError) as e:
        LOG.debug("Unable to convert body %s into %s: %s", truncate(body), model, e)
        raise error_class(MARSHALING, "Unable to convert type", e) from e


def encode(model: Any) -> Any:
    """
    Converts a model instance (or a list of them) into JSON-compatible primitives, using field aliases and
    dropping ``None`` values.
    """
    if model is None:
        return None
    if isinstance(model, (list, tuple)):
        return [encode(item) for item in model]
    return get_type_adapter(type(model)).dump_python(
        model, mode="json", by_alias=True, exclude_none=True
    )


def encode_bytes(model: Any) -> bytes:
    """Returns the JSON body of the given model, or ``b""`` for ``None``."""
    if model is None:
        return b""
    return canonical_json(encode(model))
