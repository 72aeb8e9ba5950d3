"""Transport layer for the Kai service connection."""

from .base import Transport
from .serial import SerialTransport

__all__ = ["Transport", "SerialTransport"]
