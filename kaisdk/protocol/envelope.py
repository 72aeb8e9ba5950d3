"""Envelope decoder for messages from the Kai service.

Parses raw transport messages into structured envelopes and decodes the
type-specific bodies of the envelopes the dispatcher acts on.
Pure functions with no side effects; nothing here raises on bad input.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from ..errors import MalformedError
from ..models import Hand, SDKError
from . import constants as C
from .fields import (
    optional_bool,
    require_bool,
    require_int,
    require_list,
    require_str,
)


class DecodeErrorKind(Enum):
    """Why a message or fragment could not be decoded."""
    MALFORMED = "malformed"


@dataclass(frozen=True)
class DecodeError:
    """A message or fragment that could not be decoded.

    Attributes:
        kind: Failure category
        raw: The original input, kept for diagnostic logging
        reason: Human readable description of the first problem found
    """
    kind: DecodeErrorKind
    raw: Any
    reason: str

    @classmethod
    def malformed(cls, raw: Any, reason: str) -> DecodeError:
        return cls(kind=DecodeErrorKind.MALFORMED, raw=raw, reason=reason)


@dataclass(frozen=True)
class Envelope:
    """One complete inbound message.

    Attributes:
        type: Discriminator tag; None only on failure envelopes, which
            the service sends without one
        success: False means ``body`` describes an error, never data
        body: The full decoded JSON object
        raw: The message as received
    """
    type: Optional[str]
    success: bool
    body: Mapping[str, Any]
    raw: Union[str, bytes]


@dataclass(frozen=True)
class IncomingData:
    """Decoded ``incomingData`` envelope. Fragments are decoded one by one later."""
    foreground_process: str
    kai_id: int
    default_kai: bool
    default_left_kai: bool
    default_right_kai: bool
    fragments: Tuple[Any, ...]


@dataclass(frozen=True)
class ConnectedKai:
    """One entry of a ``connectedKais`` envelope."""
    kai_id: int
    hand: Hand
    default_kai: bool = False
    default_left_kai: bool = False
    default_right_kai: bool = False


def decode_envelope(raw: Union[str, bytes]) -> Union[Envelope, DecodeError]:
    """Parse a raw message into an Envelope.

    Args:
        raw: One complete JSON message from the transport

    Returns:
        Envelope on success, DecodeError carrying ``raw`` otherwise

    Examples:
        >>> env = decode_envelope('{"success": true, "type": "authentication"}')
        >>> env.type
        'authentication'
        >>> decode_envelope('not json').kind
        <DecodeErrorKind.MALFORMED: 'malformed'>
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        body = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        return DecodeError.malformed(raw, f"invalid JSON: {e}")

    if not isinstance(body, dict):
        return DecodeError.malformed(raw, f"expected a JSON object, got {type(body).__name__}")

    try:
        success = require_bool(body, C.SUCCESS)
        type_ = require_str(body, C.TYPE) if success else body.get(C.TYPE)
    except MalformedError as e:
        return DecodeError.malformed(raw, e.reason)

    if type_ is not None and not isinstance(type_, str):
        type_ = None

    return Envelope(type=type_, success=success, body=body, raw=raw)


def decode_sdk_error(envelope: Envelope) -> Union[SDKError, DecodeError]:
    """Decode the error descriptor of a ``success: false`` envelope."""
    try:
        return SDKError(
            code=require_int(envelope.body, C.ERROR_CODE),
            name=require_str(envelope.body, C.ERROR),
            message=require_str(envelope.body, C.MESSAGE),
        )
    except MalformedError as e:
        return DecodeError.malformed(envelope.raw, e.reason)


def decode_authentication(envelope: Envelope) -> Union[bool, DecodeError]:
    try:
        return require_bool(envelope.body, C.AUTHENTICATED)
    except MalformedError as e:
        return DecodeError.malformed(envelope.raw, e.reason)


def decode_incoming_data(envelope: Envelope) -> Union[IncomingData, DecodeError]:
    """Decode the routing header of an ``incomingData`` envelope.

    The fragments in ``data`` are returned undecoded so that one bad
    fragment cannot invalidate its siblings.
    """
    body = envelope.body
    try:
        return IncomingData(
            foreground_process=require_str(body, C.FOREGROUND_PROCESS),
            kai_id=require_int(body, C.KAI_ID),
            default_kai=optional_bool(body, C.DEFAULT_KAI),
            default_left_kai=optional_bool(body, C.DEFAULT_LEFT_KAI),
            default_right_kai=optional_bool(body, C.DEFAULT_RIGHT_KAI),
            fragments=tuple(require_list(body, C.DATA)),
        )
    except MalformedError as e:
        return DecodeError.malformed(envelope.raw, e.reason)


def parse_hand(value: Any) -> Hand:
    """Match a hand string case-insensitively; anything else means left."""
    if isinstance(value, str):
        for hand in Hand:
            if hand.value == value.lower():
                return hand
    return Hand.LEFT


def decode_connected_kais(envelope: Envelope) -> Union[Tuple[ConnectedKai, ...], DecodeError]:
    """Decode every entry of a ``connectedKais`` envelope.

    Any malformed entry rejects the whole list so the registry is never
    replaced with a partial table.
    """
    try:
        entries = []
        for item in require_list(envelope.body, C.KAIS):
            if not isinstance(item, dict):
                raise MalformedError(f"kai entry must be an object, got {item!r}")
            entries.append(ConnectedKai(
                kai_id=require_int(item, C.KAI_ID),
                hand=parse_hand(item.get(C.HAND)),
                default_kai=optional_bool(item, C.DEFAULT_KAI),
                default_left_kai=optional_bool(item, C.DEFAULT_LEFT_KAI),
                default_right_kai=optional_bool(item, C.DEFAULT_RIGHT_KAI),
            ))
        return tuple(entries)
    except MalformedError as e:
        return DecodeError.malformed(envelope.raw, e.reason)
