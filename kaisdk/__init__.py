"""Kai SDK - typed, routed events from Kai gesture controllers."""

from .client import KaiSDK
from .errors import KaiSDKError, NotAuthenticatedError, NotInitialisedError
from .events import Scope
from .models import (
    AccelerometerReading,
    Capability,
    DeviceHandle,
    EventKind,
    FingerPositionReading,
    FingerShortcutReading,
    Gesture,
    GestureReading,
    GyroscopeReading,
    Hand,
    LinearFlickReading,
    MagnetometerReading,
    PYRReading,
    Quaternion,
    QuaternionReading,
    SDKError,
    UnknownGestureReading,
    Vector3,
)
from .transport import SerialTransport, Transport

__all__ = [
    "KaiSDK",
    "KaiSDKError",
    "NotAuthenticatedError",
    "NotInitialisedError",
    "Scope",
    "AccelerometerReading",
    "Capability",
    "DeviceHandle",
    "EventKind",
    "FingerPositionReading",
    "FingerShortcutReading",
    "Gesture",
    "GestureReading",
    "GyroscopeReading",
    "Hand",
    "LinearFlickReading",
    "MagnetometerReading",
    "PYRReading",
    "Quaternion",
    "QuaternionReading",
    "SDKError",
    "UnknownGestureReading",
    "Vector3",
    "SerialTransport",
    "Transport",
]
