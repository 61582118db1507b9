"""Payload codecs layered over raw item reads and writes.

Supports JSON documents, TOML tables and Pydantic models. Encoding
errors surface as the library's own exceptions; decoding errors are
reported as PayloadError.
"""

import json
import tomllib
from typing import Any, TypeVar

import tomli_w
from pydantic import BaseModel, ValidationError

from filedb.core.errors import PayloadError

ModelT = TypeVar("ModelT", bound=BaseModel)


def encode_json(value: Any) -> bytes:
    """Serialize ``value`` to UTF-8 JSON bytes."""
    return json.dumps(value, ensure_ascii=False).encode("utf-8")


def decode_json(data: bytes) -> Any:
    """Parse JSON bytes.

    Raises:
        PayloadError: If the bytes are not valid UTF-8 JSON.
    """
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadError(f"Invalid JSON payload: {e}") from e


def encode_toml(value: dict[str, Any]) -> bytes:
    """Serialize a table to TOML bytes."""
    return tomli_w.dumps(value).encode("utf-8")


def decode_toml(data: bytes) -> dict[str, Any]:
    """Parse TOML bytes into a dictionary.

    Raises:
        PayloadError: If the bytes are not valid UTF-8 TOML.
    """
    try:
        return tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise PayloadError(f"Invalid TOML payload: {e}") from e


def encode_model(model: BaseModel) -> bytes:
    """Serialize a Pydantic model to JSON bytes."""
    return model.model_dump_json().encode("utf-8")


def decode_model(data: bytes, model_type: type[ModelT]) -> ModelT:
    """Validate JSON bytes against ``model_type``.

    Raises:
        PayloadError: If the bytes do not validate.
    """
    try:
        return model_type.model_validate_json(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid {model_type.__name__} payload: {e}") from e
