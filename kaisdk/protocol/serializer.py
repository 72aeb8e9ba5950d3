"""Protocol serializer for messages sent to the Kai service.

Converts outgoing requests to compact, newline-free JSON strings.
Pure functions with no side effects.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from ..models import Capability
from . import constants as C


# Capability bit -> setCapabilities field name
CAPABILITY_FIELDS = {
    Capability.GESTURE: C.GESTURE_DATA,
    Capability.LINEAR_FLICK: C.LINEAR_FLICK_DATA,
    Capability.FINGER_SHORTCUT: C.FINGER_SHORTCUT_DATA,
    Capability.FINGER_POSITION: C.FINGER_POSITIONAL_DATA,
    Capability.PYR: C.PYR_DATA,
    Capability.QUATERNION: C.QUATERNION_DATA,
    Capability.ACCELEROMETER: C.ACCELEROMETER_DATA,
    Capability.GYROSCOPE: C.GYROSCOPE_DATA,
    Capability.MAGNETOMETER: C.MAGNETOMETER_DATA,
}


class ProtocolSerializer:
    """Serializer for the Kai service request protocol."""

    @staticmethod
    def serialize_authentication(module_id: str, module_secret: str) -> str:
        """Build the authentication request.

        Examples:
            >>> ProtocolSerializer.serialize_authentication("mod", "s3cret")
            '{"type":"authentication","moduleId":"mod","moduleSecret":"s3cret"}'
        """
        return ProtocolSerializer._dumps({
            C.TYPE: C.AUTHENTICATION,
            C.MODULE_ID: module_id,
            C.MODULE_SECRET: module_secret,
        })

    @staticmethod
    def capabilities_to_dict(capabilities: Capability) -> Dict[str, Any]:
        """Build the setCapabilities object.

        Only enabled capabilities appear, each as ``true``; disabled ones
        are omitted rather than sent as ``false``.
        """
        message: Dict[str, Any] = {C.TYPE: C.SET_CAPABILITIES}
        for flag, field in CAPABILITY_FIELDS.items():
            if flag in capabilities:
                message[field] = True
        return message

    @staticmethod
    def serialize_capabilities(capabilities: Capability) -> str:
        """Serialize a capability set.

        Examples:
            >>> ProtocolSerializer.serialize_capabilities(Capability.GESTURE | Capability.PYR)
            '{"type":"setCapabilities","gestureData":true,"pyrData":true}'
        """
        return ProtocolSerializer._dumps(ProtocolSerializer.capabilities_to_dict(capabilities))

    @staticmethod
    def parse_capabilities(message: Mapping[str, Any]) -> Capability:
        """Recover the capability set from a setCapabilities object."""
        capabilities = Capability.NONE
        for flag, field in CAPABILITY_FIELDS.items():
            if message.get(field) is True:
                capabilities |= flag
        return capabilities

    @staticmethod
    def _dumps(message: Mapping[str, Any]) -> str:
        return json.dumps(message, separators=(",", ":"))
