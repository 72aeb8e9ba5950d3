"""pyserial transport for the Kai service connection.

The Kai service listens on a local TCP port; pyserial's URL handlers let the
same transport talk to it (``socket://host:port``), to a serial bridge
(``/dev/ttyUSB0``) or to a loopback device (``loop://``) in tests.

Messages are newline-terminated UTF-8 JSON objects in both directions.
"""
from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, List, Optional

import serial

from .base import Transport
from .buffer import LineBuffer

logger = logging.getLogger(__name__)

DEFAULT_URL = "socket://localhost:2203"
DEFAULT_BAUD = 115200  # ignored by socket:// URLs
READ_TIMEOUT = 0.1  # seconds
READ_CHUNK_SIZE = 4096  # bytes
MAX_BUFFER_SIZE = 1024 * 1024  # longest accepted message


class SerialTransport(Transport):
    """Transport over any pyserial URL.

    Responsibilities:
    - Open/close the pyserial port
    - Frame the incoming byte stream into messages
    - Notify subscribers of each message from a single reader thread
    - Send queued messages from a sender thread
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        baudrate: int = DEFAULT_BAUD,
        timeout: float = READ_TIMEOUT,
        chunk_size: int = READ_CHUNK_SIZE,
        max_message_size: int = MAX_BUFFER_SIZE,
    ):
        """Initialize SerialTransport.

        Args:
            url: pyserial URL or device path of the service endpoint
            baudrate: Baud rate for real serial devices
            timeout: Read timeout in seconds
            chunk_size: Maximum bytes to read per chunk
            max_message_size: Longest message kept before it is discarded
        """
        self._url = url
        self._baudrate = baudrate
        self._timeout = timeout
        self._chunk_size = chunk_size

        self._serial: Optional[serial.SerialBase] = None
        self._buffer = LineBuffer(max_size=max_message_size)

        self._connected = False
        self._active = False
        self._subscribers: List[Callable[[str], None]] = []
        self._subscriber_lock = threading.Lock()

        self._send_queue: queue.Queue[Optional[str]] = queue.Queue()
        self._reader_thread: Optional[threading.Thread] = None
        self._sender_thread: Optional[threading.Thread] = None

    def connect(self) -> bool:
        """Open the port and start the reader and sender threads."""
        if self._connected:
            logger.warning("Already connected")
            return True

        try:
            self._serial = serial.serial_for_url(
                self._url,
                baudrate=self._baudrate,
                timeout=self._timeout,
            )
            self._serial.reset_input_buffer()
        except serial.SerialException as e:
            logger.error(f"Failed to open {self._url}: {e}")
            self._serial = None
            return False

        logger.info(f"Connected to Kai service at {self._url}")

        # Threads left over from a connection lost to an I/O error
        self._join_threads()
        self._buffer.clear()
        # Drop messages and the stop sentinel left behind by a failed sender
        self._send_queue = queue.Queue()
        self._active = True
        self._connected = True
        self._start_threads()
        return True

    def disconnect(self) -> None:
        """Stop the threads and close the port."""
        if not self._connected:
            return

        self._active = False
        self._connected = False

        self._send_queue.put(None)
        self._join_threads()
        self._close_port()
        logger.info("Disconnected from Kai service")

    def is_connected(self) -> bool:
        return self._connected and self._serial is not None

    def subscribe_messages(
        self,
        callback: Callable[[str], None]
    ) -> Callable[[], None]:
        """Subscribe to incoming messages."""
        with self._subscriber_lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._subscriber_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def send(self, data: str) -> None:
        """Queue a message for sending."""
        if not self._connected:
            logger.warning("Cannot send, not connected")
            return

        self._send_queue.put(data)

    def _start_threads(self) -> None:
        self._reader_thread = threading.Thread(
            target=self._reader_loop,
            daemon=True,
            name="KaiTransportReader"
        )
        self._reader_thread.start()

        self._sender_thread = threading.Thread(
            target=self._sender_loop,
            daemon=True,
            name="KaiTransportSender"
        )
        self._sender_thread.start()

    def _join_threads(self) -> None:
        for thread in (self._sender_thread, self._reader_thread):
            if thread and thread.is_alive() and thread is not threading.current_thread():
                thread.join(timeout=1.0)

    def _reader_loop(self) -> None:
        """Read chunks, frame them and dispatch each message in arrival order."""
        logger.debug("Reader thread started")

        while self._active and self._serial:
            try:
                chunk = self._serial.read(self._chunk_size)
            except serial.SerialException as e:
                if self._active:
                    logger.error(f"Read error: {e}")
                    self._handle_error(e)
                break

            for message in self._buffer.feed(chunk):
                self._notify_subscribers(message)

        logger.debug("Reader thread exiting")

    def _sender_loop(self) -> None:
        """Write queued messages until the sentinel arrives."""
        while True:
            try:
                data = self._send_queue.get(timeout=1.0)
            except queue.Empty:
                if not self._active:
                    break
                continue

            if data is None:  # Sentinel
                break

            port = self._serial
            if port is None:
                continue

            try:
                port.write((data + "\n").encode("utf-8"))
                port.flush()
            except serial.SerialException as e:
                if self._active:
                    logger.error(f"Send error: {e}")
                    self._handle_error(e)
                break

    def _notify_subscribers(self, message: str) -> None:
        with self._subscriber_lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(message)
            except Exception:
                logger.exception("Error in message subscriber")

    def _handle_error(self, error: Exception) -> None:
        """Close the port after a fatal I/O error.

        Does not join threads to avoid deadlock if called from one of them.
        """
        logger.warning(f"Handling connection error: {error}")
        self._active = False
        self._connected = False
        self._send_queue.put(None)
        self._close_port()

    def _close_port(self) -> None:
        port, self._serial = self._serial, None
        if port is not None:
            try:
                port.close()
            except serial.SerialException as e:
                logger.error(f"Error closing port: {e}")
