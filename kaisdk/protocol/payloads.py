"""Decoders for the data fragments of an ``incomingData`` envelope.

One pure function per capability kind. Each returns a typed reading, or a
DecodeError when a field is missing or mistyped. None of them raise.
"""
from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Mapping, Union

from ..errors import MalformedError
from ..models import (
    AccelerometerReading,
    FingerPositionReading,
    FingerShortcutReading,
    Gesture,
    GestureReading,
    GyroscopeReading,
    LinearFlickReading,
    MagnetometerReading,
    PYRReading,
    Quaternion,
    QuaternionReading,
    Reading,
    UnknownGestureReading,
    Vector3,
)
from . import constants as C
from .envelope import DecodeError
from .fields import as_bool, as_int, require_float, require_list, require_object, require_str

PayloadDecoder = Callable[[Mapping[str, Any]], Union[Reading, DecodeError]]

_GESTURES_BY_NAME = {gesture.value.lower(): gesture for gesture in Gesture}


def _total(func):
    """Turn a MalformedError raised by ``func`` into a returned DecodeError."""
    @functools.wraps(func)
    def wrapper(fragment):
        try:
            return func(fragment)
        except MalformedError as e:
            return DecodeError.malformed(fragment, e.reason)
    return wrapper


def _vector(fragment: Mapping[str, Any], key: str) -> Vector3:
    obj = require_object(fragment, key)
    return Vector3(
        x=require_float(obj, C.X),
        y=require_float(obj, C.Y),
        z=require_float(obj, C.Z),
    )


def _finger_values(fragment: Mapping[str, Any], convert, default) -> tuple:
    """Read up to four finger values; missing trailing slots keep ``default``."""
    values = require_list(fragment, C.FINGERS)
    if len(values) > C.FINGER_COUNT:
        raise MalformedError(f"expected at most {C.FINGER_COUNT} fingers, got {len(values)}")
    slots = [default] * C.FINGER_COUNT
    for i, value in enumerate(values):
        slots[i] = convert(value, f"{C.FINGERS}[{i}]")
    return tuple(slots)


@_total
def decode_gesture(fragment: Mapping[str, Any]) -> Union[GestureReading, UnknownGestureReading]:
    """Decode a gesture fragment.

    Names are matched case-insensitively. A name the SDK does not know is
    still a valid reading and comes back as UnknownGestureReading.

    Examples:
        >>> decode_gesture({"gesture": "SWIPEUP"})
        GestureReading(gesture=<Gesture.SWIPE_UP: 'swipeUp'>)
        >>> decode_gesture({"gesture": "TripleTap"})
        UnknownGestureReading(gesture='TripleTap')
    """
    name = require_str(fragment, C.GESTURE)
    gesture = _GESTURES_BY_NAME.get(name.lower())
    if gesture is None:
        return UnknownGestureReading(gesture=name)
    return GestureReading(gesture=gesture)


@_total
def decode_linear_flick(fragment: Mapping[str, Any]) -> LinearFlickReading:
    return LinearFlickReading(flick=require_str(fragment, C.FLICK))


@_total
def decode_finger_shortcut(fragment: Mapping[str, Any]) -> FingerShortcutReading:
    return FingerShortcutReading(fingers=_finger_values(fragment, as_bool, False))


@_total
def decode_finger_position(fragment: Mapping[str, Any]) -> FingerPositionReading:
    return FingerPositionReading(fingers=_finger_values(fragment, as_int, 0))


@_total
def decode_pyr(fragment: Mapping[str, Any]) -> PYRReading:
    # pitch, yaw and roll sit directly on the fragment
    return PYRReading(
        pitch=require_float(fragment, C.PITCH),
        yaw=require_float(fragment, C.YAW),
        roll=require_float(fragment, C.ROLL),
    )


@_total
def decode_quaternion(fragment: Mapping[str, Any]) -> QuaternionReading:
    obj = require_object(fragment, C.QUATERNION)
    return QuaternionReading(quaternion=Quaternion(
        w=require_float(obj, C.W),
        x=require_float(obj, C.X),
        y=require_float(obj, C.Y),
        z=require_float(obj, C.Z),
    ))


@_total
def decode_accelerometer(fragment: Mapping[str, Any]) -> AccelerometerReading:
    return AccelerometerReading(accelerometer=_vector(fragment, C.ACCELEROMETER))


@_total
def decode_gyroscope(fragment: Mapping[str, Any]) -> GyroscopeReading:
    return GyroscopeReading(gyroscope=_vector(fragment, C.GYROSCOPE))


@_total
def decode_magnetometer(fragment: Mapping[str, Any]) -> MagnetometerReading:
    return MagnetometerReading(magnetometer=_vector(fragment, C.MAGNETOMETER))


PAYLOAD_DECODERS: Dict[str, PayloadDecoder] = {
    C.GESTURE_DATA: decode_gesture,
    C.LINEAR_FLICK_DATA: decode_linear_flick,
    C.FINGER_SHORTCUT_DATA: decode_finger_shortcut,
    C.FINGER_POSITIONAL_DATA: decode_finger_position,
    C.PYR_DATA: decode_pyr,
    C.QUATERNION_DATA: decode_quaternion,
    C.ACCELEROMETER_DATA: decode_accelerometer,
    C.GYROSCOPE_DATA: decode_gyroscope,
    C.MAGNETOMETER_DATA: decode_magnetometer,
}
