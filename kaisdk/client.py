"""Kai SDK session.

KaiSDK is the object an application holds for one connection to the Kai
service. It owns all session state (credentials, authentication, the
connected-Kai registry and subscribers), so several independent sessions
can coexist in one process.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Union

from .dispatch import DispatchRouter, SessionState
from .errors import NotAuthenticatedError, NotInitialisedError
from .events import ErrorCallback, ReadingCallback, ScopeKey, SubscriptionRegistry, UnknownDataCallback
from .models import Capability, DeviceHandle, EventKind
from .protocol.serializer import ProtocolSerializer
from .registry import Alias, DeviceRegistry
from .transport.base import Transport

logger = logging.getLogger(__name__)


class KaiSDK:
    """One session with the Kai service.

    Example:
        >>> kai = KaiSDK(transport=SerialTransport())
        >>> kai.initialise("my-module", "my-secret")
        >>> kai.on(Scope.ANY, EventKind.GESTURE, lambda dev, r: print(r.gesture))
        >>> kai.connect()
    """

    def __init__(self, transport: Optional[Transport] = None):
        """Initialize an unauthenticated session.

        Args:
            transport: Connection to the service. May be omitted when messages
                are fed to handle_incoming() by the caller.
        """
        self._transport = transport
        self._unsubscribe_transport: Optional[Callable[[], None]] = None

        self._module_id: Optional[str] = None
        self._module_secret: Optional[str] = None
        self._initialised = False
        self._init_lock = threading.Lock()

        self._session = SessionState()
        self._registry = DeviceRegistry()
        self._subscriptions = SubscriptionRegistry()
        self._router = DispatchRouter(self._session, self._registry, self._subscriptions)

    # --- Lifecycle ---

    def initialise(self, module_id: str, module_secret: str) -> None:
        """Record the module credentials. Must be called before connect()."""
        with self._init_lock:
            self._module_id = module_id
            self._module_secret = module_secret
            self._initialised = True

    def connect(self) -> bool:
        """Connect the transport and authenticate with the service.

        Returns:
            True if the transport connected

        Raises:
            NotInitialisedError: if initialise() was not called, or there is
                no transport
        """
        if not self.initialised:
            raise NotInitialisedError("You must call initialise() before trying to get data")
        transport = self._require_transport()

        if self._unsubscribe_transport is None:
            self._unsubscribe_transport = transport.subscribe_messages(self.handle_incoming)

        if not transport.connect():
            logger.error("Could not connect to the Kai service")
            return False

        self.send(ProtocolSerializer.serialize_authentication(self._module_id, self._module_secret))
        return True

    def disconnect(self) -> None:
        if self._unsubscribe_transport is not None:
            self._unsubscribe_transport()
            self._unsubscribe_transport = None
        if self._transport is not None:
            self._transport.disconnect()

    def set_capabilities(self, capabilities: Capability) -> None:
        """Ask the service to report the given capabilities.

        Raises:
            NotAuthenticatedError: if the service has not authenticated the module
        """
        if not self.authenticated:
            raise NotAuthenticatedError("module not authenticated")
        self.send(ProtocolSerializer.serialize_capabilities(capabilities))

    def __enter__(self) -> KaiSDK:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    # --- Transport boundary ---

    def handle_incoming(self, raw: Union[str, bytes]) -> None:
        """Process one complete message from the service.

        Called by the transport once per message, in arrival order. Bad data
        is logged and dropped; this never raises into the transport.
        """
        if not self.initialised:
            logger.warning(f"Received {raw!r} before the SDK was initialised. Ignoring...")
            return

        try:
            self._router.dispatch(raw)
        except Exception:
            logger.exception(f"Unexpected error handling message: {raw!r}")

    def send(self, serialized: str) -> None:
        """Hand one serialized message to the transport. Does not wait for delivery."""
        self._require_transport().send(serialized)

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise NotInitialisedError("No transport attached to this session")
        return self._transport

    # --- Subscriptions ---

    def on(self, scope: ScopeKey, kind: EventKind, callback: ReadingCallback) -> Callable[[], None]:
        """Subscribe to readings of one kind on one scope. Returns an unsubscribe function."""
        return self._subscriptions.subscribe(scope, kind, callback)

    def on_error(self, callback: ErrorCallback) -> Callable[[], None]:
        return self._subscriptions.subscribe_error(callback)

    def on_unknown_data(self, callback: UnknownDataCallback) -> Callable[[], None]:
        return self._subscriptions.subscribe_unknown_data(callback)

    @property
    def subscriptions(self) -> SubscriptionRegistry:
        return self._subscriptions

    # --- Session state ---

    @property
    def initialised(self) -> bool:
        with self._init_lock:
            return self._initialised

    @property
    def module_id(self) -> Optional[str]:
        return self._module_id

    @property
    def authenticated(self) -> bool:
        return self._session.authenticated

    @property
    def foreground_process(self) -> Optional[str]:
        """Name of the process in focus, as last reported by the service."""
        return self._session.foreground_process

    @property
    def default_kai(self) -> Optional[DeviceHandle]:
        return self._registry.alias(Alias.DEFAULT)

    @property
    def default_left_kai(self) -> Optional[DeviceHandle]:
        return self._registry.alias(Alias.DEFAULT_LEFT)

    @property
    def default_right_kai(self) -> Optional[DeviceHandle]:
        return self._registry.alias(Alias.DEFAULT_RIGHT)

    def get_kai(self, kai_id: int) -> Optional[DeviceHandle]:
        return self._registry.lookup(kai_id)

    def connected_kais(self) -> List[DeviceHandle]:
        return self._registry.connected()
