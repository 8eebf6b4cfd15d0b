# SPDX-License-Identifier: Apache-2.0
"""
Locating and normalising transaction bytes in agent tool observations.

In RETURN_BYTES mode a transaction-building tool does not submit anything; its
observation carries the frozen, unsigned transaction instead. Depending on the
toolkit version and on how LangChain serialised the tool result, that
observation can arrive as:

- the toolkit's serialised ``ReturnBytesToolResponse``:
  ``{"type": "return_bytes", "bytes_data": "<hex>", "human_message": ..., "error": ...}``
- a raw ``bytes`` / ``bytearray`` / ``memoryview``
- a mapping (or its JSON text, or a pydantic model) with a ``bytes`` key,
  either at top level or under ``raw``.

Either way the transaction value is one of
    * raw bytes
    * a Node-style buffer envelope ``{"type": "Buffer", "data": [..]}``
    * a list of ints in 0..255
    * a hex string (``0x`` prefix optional)
    * a base64 string

Everything else is ``NoPayload``. Classification is explicit: a ``bytes`` or
``bytes_data`` value is only trusted when it validates against one of the
shapes above.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from collections.abc import Mapping
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from .errors import PayloadError
from .models import TurnResult

__all__ = [
    "NoPayload",
    "RawBytes",
    "EncodedBytes",
    "Payload",
    "classify_observation",
    "to_bytes",
    "extract_payload",
]

_LOG = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})+$")

Octet = Annotated[StrictInt, Field(ge=0, le=255)]


# ---------------------------------------------------------------------------
# Tagged payload types
# ---------------------------------------------------------------------------

class NoPayload(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["none"] = "none"


class RawBytes(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["raw"] = "raw"
    data: bytes


class EncodedBytes(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
    kind: Literal["encoded"] = "encoded"
    container: Any


Payload = Union[NoPayload, RawBytes, EncodedBytes]


class _BufferEnvelope(BaseModel):
    """JSON form of a Node.js Buffer: {"type": "Buffer", "data": [...]}"""
    type: Literal["Buffer"]
    data: List[Octet]


class _ReturnBytesEnvelope(BaseModel):
    """Serialised hedera-agent-kit ReturnBytesToolResponse."""
    type: Literal["return_bytes"]
    bytes_data: Any = None
    human_message: Optional[str] = None
    error: Any = None


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _as_mapping(observation: Any) -> Optional[Mapping]:
    if isinstance(observation, Mapping):
        return observation
    if isinstance(observation, BaseModel):
        return observation.model_dump()
    if isinstance(observation, str):
        text = observation.strip()
        if not text.startswith("{"):
            return None  # plain prose, the normal case for queries
        try:
            data = json.loads(text)
        except ValueError:
            _LOG.debug("Observation looks like JSON but does not parse; ignoring")
            return None
        return data if isinstance(data, Mapping) else None
    return None


def _bytes_field(mapping: Mapping) -> Any:
    for candidate in (mapping, mapping.get("raw")):
        if not isinstance(candidate, Mapping):
            continue
        if candidate.get("type") == "return_bytes":
            try:
                envelope = _ReturnBytesEnvelope.model_validate(candidate)
            except ValidationError:
                _LOG.debug("return_bytes envelope does not validate; ignoring")
                return None
            return envelope.bytes_data
        if "bytes" in candidate:
            return candidate["bytes"]
    return None


def classify_observation(observation: Any) -> Payload:
    """Tag a tool observation as NoPayload, RawBytes or EncodedBytes."""
    if isinstance(observation, (bytes, bytearray, memoryview)):
        return RawBytes(data=bytes(observation))

    mapping = _as_mapping(observation)
    if mapping is None:
        return NoPayload()

    value = _bytes_field(mapping)
    if value is None:
        return NoPayload()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytes(data=bytes(value))
    return EncodedBytes(container=value)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def _decode_text(text: str) -> bytes:
    s = text.strip()
    if s[:2].lower() == "0x":
        s = s[2:]
        if not _HEX_RE.match(s):
            raise PayloadError("0x-prefixed value is not valid hex", text)
        return bytes.fromhex(s)
    # Hex wins over base64 when both would parse.
    if _HEX_RE.match(s):
        return bytes.fromhex(s)
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadError(f"string is neither hex nor base64 ({e})", text) from e


def _decode_container(container: Any) -> bytes:
    if isinstance(container, (bytes, bytearray, memoryview)):
        return bytes(container)
    if isinstance(container, str):
        return _decode_text(container)
    if isinstance(container, Mapping):
        try:
            envelope = _BufferEnvelope.model_validate(container)
        except ValidationError as e:
            raise PayloadError(f"unrecognised buffer object ({e.error_count()} errors)", container) from e
        return bytes(envelope.data)
    if isinstance(container, (list, tuple)):
        try:
            envelope = _BufferEnvelope(type="Buffer", data=list(container))
        except ValidationError as e:
            raise PayloadError("list is not a sequence of octets", container) from e
        return bytes(envelope.data)
    raise PayloadError(f"unsupported container type {type(container).__name__}", container)


def to_bytes(payload: Payload) -> Optional[bytes]:
    """
    Return the canonical raw bytes for a payload, or None for NoPayload.

    Raises PayloadError when the payload cannot be decoded or is empty.
    """
    if isinstance(payload, NoPayload):
        return None
    if isinstance(payload, RawBytes):
        data = payload.data
    elif isinstance(payload, EncodedBytes):
        data = _decode_container(payload.container)
    else:  # pragma: no cover - exhaustive
        raise TypeError(f"not a payload: {payload!r}")
    if not data:
        raise PayloadError("payload is empty", payload)
    return data


def extract_payload(result: TurnResult) -> Optional[bytes]:
    """
    Transaction bytes produced by the most recent tool call of a turn, if any.

    Never raises: decoding problems are logged and reported as "no payload".
    """
    step = result.last_step
    if step is None:
        return None
    payload = classify_observation(step.observation)
    try:
        return to_bytes(payload)
    except PayloadError as e:
        _LOG.warning(
            "Ignoring undecodable transaction payload from tool %s: %s",
            step.tool,
            e.reason,
            extra={"tool": step.tool, "payload_kind": payload.kind},
        )
        return None
