"""Newline framing for the transport layer.

Collects raw byte chunks as they arrive and splits them into complete
messages. Partial messages stay buffered until their newline arrives.
"""
import threading
import logging
from typing import List

logger = logging.getLogger(__name__)


class LineBuffer:
    """Thread-safe accumulator that turns a byte stream into text messages."""

    def __init__(self, max_size: int = 256 * 1024, encoding: str = "utf-8"):
        """Initialize buffer.

        Args:
            max_size: Longest message kept, in bytes. A partial message that
                grows past this is discarded up to its next newline.
            encoding: Text encoding of the stream
        """
        self._max_size = max_size
        self._encoding = encoding
        self._pending = bytearray()
        self._discarding = False
        self._lock = threading.Lock()
        self._overflow_count = 0

    def feed(self, chunk: bytes) -> List[str]:
        """Add a chunk and return every message it completed, in order.

        Blank lines are skipped. Trailing ``\\r`` is stripped.
        """
        if not chunk:
            return []

        messages = []
        with self._lock:
            self._pending.extend(chunk)

            while True:
                idx = self._pending.find(b'\n')
                if idx == -1:
                    break
                line = bytes(self._pending[:idx])
                del self._pending[:idx + 1]

                if self._discarding:
                    # Tail of an oversized message
                    self._discarding = False
                    continue

                text = line.decode(self._encoding, errors="replace").strip()
                if text:
                    messages.append(text)

            if len(self._pending) > self._max_size:
                self._overflow_count += 1
                logger.warning(f"Message longer than {self._max_size} bytes, discarding it.")
                self._pending.clear()
                self._discarding = True

        return messages

    @property
    def size(self) -> int:
        """Bytes of the message currently being assembled."""
        with self._lock:
            return len(self._pending)

    @property
    def overflow_count(self) -> int:
        with self._lock:
            return self._overflow_count

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()
            self._discarding = False
