"""Immutable data models for Kai devices and the readings they report.

All models are frozen dataclasses to ensure immutability and thread-safety.
These models serve as the contract between the protocol, dispatch and
application layers.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Optional, Tuple, Union


class Hand(Enum):
    """Which hand a Kai is worn on."""
    LEFT = "left"
    RIGHT = "right"


class Gesture(Enum):
    """Gestures recognised by the Kai service."""
    SWIPE_UP = "swipeUp"
    SWIPE_DOWN = "swipeDown"
    SWIPE_LEFT = "swipeLeft"
    SWIPE_RIGHT = "swipeRight"
    SIDE_SWIPE_UP = "sideSwipeUp"
    SIDE_SWIPE_DOWN = "sideSwipeDown"
    SIDE_SWIPE_LEFT = "sideSwipeLeft"
    SIDE_SWIPE_RIGHT = "sideSwipeRight"
    PINCH2_BEGIN = "pinch2Begin"
    PINCH2_END = "pinch2End"
    GRAB_BEGIN = "grabBegin"
    GRAB_END = "grabEnd"
    PINCH3_BEGIN = "pinch3Begin"
    PINCH3_END = "pinch3End"
    DIAL_BEGIN = "dialBegin"
    DIAL_END = "dialEnd"


class Capability(IntFlag):
    """Data kinds a module can subscribe a Kai to report."""
    NONE = 0
    GESTURE = 1 << 0
    LINEAR_FLICK = 1 << 1
    FINGER_SHORTCUT = 1 << 2
    FINGER_POSITION = 1 << 3
    PYR = 1 << 4
    QUATERNION = 1 << 5
    ACCELEROMETER = 1 << 6
    GYROSCOPE = 1 << 7
    MAGNETOMETER = 1 << 8


class EventKind(Enum):
    """Delivery channels a subscriber can listen on."""
    GESTURE = "gesture"
    UNKNOWN_GESTURE = "unknown_gesture"
    LINEAR_FLICK = "linear_flick"
    FINGER_SHORTCUT = "finger_shortcut"
    FINGER_POSITION = "finger_position"
    PYR = "pyr"
    QUATERNION = "quaternion"
    ACCELEROMETER = "accelerometer"
    GYROSCOPE = "gyroscope"
    MAGNETOMETER = "magnetometer"


@dataclass(frozen=True)
class DeviceHandle:
    """A connected Kai.

    Attributes:
        kai_id: Identifier assigned by the service, 0-7 within a connection epoch
        hand: Hand the Kai is worn on, or None if the Kai is not registered
    """
    kai_id: int
    hand: Optional[Hand] = None


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    w: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class SDKError:
    """Error reported by the Kai service in a ``success: false`` envelope.

    Attributes:
        code: Numeric error code
        name: Short error identifier
        message: Human readable description
    """
    code: int
    name: str
    message: str


# Readings

@dataclass(frozen=True)
class GestureReading:
    gesture: Gesture


@dataclass(frozen=True)
class UnknownGestureReading:
    """A gesture string the SDK has no name for, kept verbatim."""
    gesture: str


@dataclass(frozen=True)
class LinearFlickReading:
    flick: str


@dataclass(frozen=True)
class FingerShortcutReading:
    """Which fingers are held down, ordered index to little finger."""
    fingers: Tuple[bool, bool, bool, bool] = (False, False, False, False)


@dataclass(frozen=True)
class FingerPositionReading:
    """Bend of each finger, ordered index to little finger."""
    fingers: Tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass(frozen=True)
class PYRReading:
    """Orientation as pitch, yaw and roll.

    Attributes:
        pitch: Pitch angle in degrees
        yaw: Yaw angle in degrees
        roll: Roll angle in degrees
    """
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass(frozen=True)
class QuaternionReading:
    quaternion: Quaternion


@dataclass(frozen=True)
class AccelerometerReading:
    accelerometer: Vector3


@dataclass(frozen=True)
class GyroscopeReading:
    gyroscope: Vector3


@dataclass(frozen=True)
class MagnetometerReading:
    magnetometer: Vector3


# Union type for all readings
Reading = Union[
    GestureReading,
    UnknownGestureReading,
    LinearFlickReading,
    FingerShortcutReading,
    FingerPositionReading,
    PYRReading,
    QuaternionReading,
    AccelerometerReading,
    GyroscopeReading,
    MagnetometerReading,
]


READING_KINDS = {
    GestureReading: EventKind.GESTURE,
    UnknownGestureReading: EventKind.UNKNOWN_GESTURE,
    LinearFlickReading: EventKind.LINEAR_FLICK,
    FingerShortcutReading: EventKind.FINGER_SHORTCUT,
    FingerPositionReading: EventKind.FINGER_POSITION,
    PYRReading: EventKind.PYR,
    QuaternionReading: EventKind.QUATERNION,
    AccelerometerReading: EventKind.ACCELEROMETER,
    GyroscopeReading: EventKind.GYROSCOPE,
    MagnetometerReading: EventKind.MAGNETOMETER,
}


def kind_of(reading: Reading) -> EventKind:
    """Return the delivery channel for a reading."""
    return READING_KINDS[type(reading)]
