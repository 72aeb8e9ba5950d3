"""Abstract base class for transport layer.

The Transport interface is the boundary between the SDK core and whatever
carries messages to and from the Kai service. Implementations can be a
serial link, a TCP socket, a WebSocket, or an in-memory fake for tests.

Key principles:
- One complete JSON message per delivery, in arrival order
- Fire-and-forget sending
- Pub/sub pattern for incoming messages
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class Transport(ABC):
    """Abstract transport interface for the Kai service connection.

    Transports are responsible for:
    1. Managing connection lifecycle
    2. Sending serialized messages to the service
    3. Publishing each complete incoming message to subscribers

    Transports should NOT decode messages. They are pure communication channels.
    """

    @abstractmethod
    def connect(self) -> bool:
        """Establish connection to the service.

        Returns:
            True if connection successful, False otherwise
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the service.

        Should be safe to call multiple times.
        Should clean up all resources (threads, sockets, etc.).
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""
        pass

    @abstractmethod
    def subscribe_messages(
        self,
        callback: Callable[[str], None]
    ) -> Callable[[], None]:
        """Subscribe to incoming messages.

        The callback is invoked once per complete message, from a single
        thread, in the order messages arrived.

        Args:
            callback: Function that receives one message string

        Returns:
            Unsubscribe function to remove this callback
        """
        pass

    @abstractmethod
    def send(self, data: str) -> None:
        """Send one serialized message to the service.

        Messages are queued and sent asynchronously. This method should not
        block and returns nothing the caller has to wait on.

        Args:
            data: Newline-free JSON message
        """
        pass

    def __enter__(self) -> Transport:
        """Context manager support - connect on enter."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager support - disconnect on exit."""
        self.disconnect()
