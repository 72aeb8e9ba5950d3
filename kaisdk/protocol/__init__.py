"""Protocol layer for JSON communication with the Kai service."""

from .envelope import (
    ConnectedKai,
    DecodeError,
    DecodeErrorKind,
    Envelope,
    IncomingData,
    decode_authentication,
    decode_connected_kais,
    decode_envelope,
    decode_incoming_data,
    decode_sdk_error,
)
from .payloads import (
    PAYLOAD_DECODERS,
    decode_accelerometer,
    decode_finger_position,
    decode_finger_shortcut,
    decode_gesture,
    decode_gyroscope,
    decode_linear_flick,
    decode_magnetometer,
    decode_pyr,
    decode_quaternion,
)
from .serializer import CAPABILITY_FIELDS, ProtocolSerializer

__all__ = [
    "ConnectedKai",
    "DecodeError",
    "DecodeErrorKind",
    "Envelope",
    "IncomingData",
    "decode_authentication",
    "decode_connected_kais",
    "decode_envelope",
    "decode_incoming_data",
    "decode_sdk_error",
    "PAYLOAD_DECODERS",
    "decode_accelerometer",
    "decode_finger_position",
    "decode_finger_shortcut",
    "decode_gesture",
    "decode_gyroscope",
    "decode_linear_flick",
    "decode_magnetometer",
    "decode_pyr",
    "decode_quaternion",
    "CAPABILITY_FIELDS",
    "ProtocolSerializer",
]
