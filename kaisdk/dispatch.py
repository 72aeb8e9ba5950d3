"""Dispatch router: turns raw service messages into routed, typed events.

Outer dispatch switches on the envelope tag. ``incomingData`` envelopes go
through inner dispatch, which decodes each data fragment on its own and
fans the reading out to every scope the envelope's routing flags select.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .events import Scope, ScopeKey, SubscriptionRegistry
from .models import DeviceHandle, kind_of
from .protocol import constants as C
from .protocol.envelope import (
    DecodeError,
    Envelope,
    IncomingData,
    decode_authentication,
    decode_connected_kais,
    decode_envelope,
    decode_incoming_data,
    decode_sdk_error,
)
from .protocol.payloads import PAYLOAD_DECODERS
from .registry import Alias, DeviceRegistry

logger = logging.getLogger(__name__)


class SessionState:
    """Session values written by the dispatcher and readable from any thread."""

    def __init__(self):
        self._lock = threading.Lock()
        self._authenticated = False
        self._foreground_process: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        with self._lock:
            return self._authenticated

    @authenticated.setter
    def authenticated(self, value: bool) -> None:
        with self._lock:
            self._authenticated = value

    @property
    def foreground_process(self) -> Optional[str]:
        with self._lock:
            return self._foreground_process

    @foreground_process.setter
    def foreground_process(self, value: str) -> None:
        with self._lock:
            self._foreground_process = value


class DispatchRouter:
    """Classifies envelopes and routes decoded readings to subscribers.

    Holds no state of its own between calls: everything it remembers lives
    in the SessionState and DeviceRegistry it was given. Dispatch of one
    message runs to completion before the next one starts.
    """

    def __init__(
        self,
        session: SessionState,
        registry: DeviceRegistry,
        subscriptions: SubscriptionRegistry,
    ):
        self._session = session
        self._registry = registry
        self._subscriptions = subscriptions
        self._handlers: Dict[str, Callable[[Envelope], None]] = {
            C.AUTHENTICATION: self._handle_authentication,
            C.INCOMING_DATA: self._handle_incoming_data,
            C.CONNECTED_KAIS: self._handle_connected_kais,
        }

    def dispatch(self, raw: Union[str, bytes]) -> None:
        """Decode one raw message and act on it. Never raises on bad data."""
        envelope = decode_envelope(raw)
        if isinstance(envelope, DecodeError):
            logger.warning(f"Dropping malformed message ({envelope.reason}): {raw!r}")
            return

        if not envelope.success:
            self._handle_sdk_error(envelope)
            return

        handler = self._handlers.get(envelope.type)
        if handler is None:
            logger.debug(f"Unknown envelope type {envelope.type!r}")
            self._subscriptions.deliver_unknown_data(envelope.body)
            return

        handler(envelope)

    # Outer dispatch

    def _handle_sdk_error(self, envelope: Envelope) -> None:
        error = decode_sdk_error(envelope)
        if isinstance(error, DecodeError):
            logger.warning(f"Dropping malformed error message ({error.reason}): {envelope.raw!r}")
            return
        logger.info(f"Service reported error {error.code} {error.name}: {error.message}")
        self._subscriptions.deliver_error(error)

    def _handle_authentication(self, envelope: Envelope) -> None:
        authenticated = decode_authentication(envelope)
        if isinstance(authenticated, DecodeError):
            logger.warning(f"Dropping malformed authentication message ({authenticated.reason})")
            return
        self._session.authenticated = authenticated
        logger.info(f"Authenticated: {authenticated}")

    def _handle_connected_kais(self, envelope: Envelope) -> None:
        entries = decode_connected_kais(envelope)
        if isinstance(entries, DecodeError):
            logger.warning(f"Dropping malformed connected Kais message ({entries.reason}): {envelope.raw!r}")
            return
        self._registry.replace_all(entries)

    def _handle_incoming_data(self, envelope: Envelope) -> None:
        data = decode_incoming_data(envelope)
        if isinstance(data, DecodeError):
            logger.warning(f"Dropping malformed incoming data ({data.reason}): {envelope.raw!r}")
            return

        self._session.foreground_process = data.foreground_process
        targets = self._resolve_targets(data)

        for index, fragment in enumerate(data.fragments):
            self._dispatch_fragment(envelope, targets, index, fragment)

    # Inner dispatch

    def _dispatch_fragment(
        self,
        envelope: Envelope,
        targets: List[Tuple[ScopeKey, DeviceHandle]],
        index: int,
        fragment: Any,
    ) -> None:
        if not isinstance(fragment, dict) or not isinstance(fragment.get(C.TYPE), str):
            logger.warning(f"Skipping malformed fragment {index}: {fragment!r}")
            return

        tag = fragment[C.TYPE]
        decoder = PAYLOAD_DECODERS.get(tag)
        if decoder is None:
            # The unknown-data sink receives the whole envelope, not the fragment
            logger.debug(f"Unknown fragment type {tag!r}")
            self._subscriptions.deliver_unknown_data(envelope.body)
            return

        reading = decoder(fragment)
        if isinstance(reading, DecodeError):
            logger.warning(f"Skipping malformed {tag} fragment ({reading.reason}): {fragment!r}")
            return

        kind = kind_of(reading)
        for scope, device in targets:
            self._subscriptions.deliver(scope, kind, device, reading)

    def _resolve_targets(self, data: IncomingData) -> List[Tuple[ScopeKey, DeviceHandle]]:
        """Scopes a reading from ``data`` goes to, in delivery order.

        Order: default, default left, default right, the source Kai's own
        scope (only if it is registered), then the any-Kai scope.
        """
        registered = self._registry.lookup(data.kai_id)
        source = registered or DeviceHandle(kai_id=data.kai_id)

        targets: List[Tuple[ScopeKey, DeviceHandle]] = []
        for flag, alias, scope in (
            (data.default_kai, Alias.DEFAULT, Scope.DEFAULT),
            (data.default_left_kai, Alias.DEFAULT_LEFT, Scope.DEFAULT_LEFT),
            (data.default_right_kai, Alias.DEFAULT_RIGHT, Scope.DEFAULT_RIGHT),
        ):
            if flag:
                targets.append((scope, self._registry.alias(alias) or source))

        if registered is not None:
            targets.append((registered.kai_id, registered))
        else:
            logger.debug(f"Kai {data.kai_id} is not registered, skipping its own scope")

        targets.append((Scope.ANY, source))
        return targets
