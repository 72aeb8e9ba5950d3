"""Unit tests for the fragment payload decoders."""
import unittest

from kaisdk.models import (
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
    UnknownGestureReading,
    Vector3,
)
from kaisdk.protocol import (
    PAYLOAD_DECODERS,
    DecodeError,
    DecodeErrorKind,
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


class TestGestureDecoder(unittest.TestCase):

    def test_known_gesture(self):
        self.assertEqual(decode_gesture({"gesture": "swipeUp"}), GestureReading(Gesture.SWIPE_UP))

    def test_case_insensitive(self):
        self.assertEqual(decode_gesture({"gesture": "SIDESWIPELEFT"}), GestureReading(Gesture.SIDE_SWIPE_LEFT))
        self.assertEqual(decode_gesture({"gesture": "Pinch3Begin"}), GestureReading(Gesture.PINCH3_BEGIN))

    def test_every_gesture_name(self):
        for gesture in Gesture:
            self.assertEqual(decode_gesture({"gesture": gesture.value}), GestureReading(gesture))
        self.assertEqual(len(Gesture), 16)

    def test_unknown_gesture_kept_verbatim(self):
        """Unrecognised names are a reading, not a failure."""
        self.assertEqual(decode_gesture({"gesture": "TripleTap"}), UnknownGestureReading("TripleTap"))

    def test_missing_gesture(self):
        result = decode_gesture({"type": "gestureData"})
        self.assertIsInstance(result, DecodeError)
        self.assertEqual(result.kind, DecodeErrorKind.MALFORMED)
        self.assertEqual(result.raw, {"type": "gestureData"})

    def test_non_string_gesture(self):
        self.assertIsInstance(decode_gesture({"gesture": 3}), DecodeError)


class TestFingerDecoders(unittest.TestCase):

    def test_shortcut(self):
        result = decode_finger_shortcut({"fingers": [True, False, True, False]})
        self.assertEqual(result, FingerShortcutReading((True, False, True, False)))

    def test_shortcut_short_array_pads_false(self):
        result = decode_finger_shortcut({"fingers": [True]})
        self.assertEqual(result, FingerShortcutReading((True, False, False, False)))

    def test_shortcut_rejects_non_bool(self):
        self.assertIsInstance(decode_finger_shortcut({"fingers": [1, 0, 0, 0]}), DecodeError)

    def test_shortcut_rejects_too_many(self):
        self.assertIsInstance(decode_finger_shortcut({"fingers": [True] * 5}), DecodeError)

    def test_position(self):
        result = decode_finger_position({"fingers": [10, 20, 30, 40]})
        self.assertEqual(result, FingerPositionReading((10, 20, 30, 40)))

    def test_position_short_array_pads_zero(self):
        result = decode_finger_position({"fingers": [7, 8]})
        self.assertEqual(result, FingerPositionReading((7, 8, 0, 0)))

    def test_position_rejects_floats_and_bools(self):
        self.assertIsInstance(decode_finger_position({"fingers": [1.5, 2, 3, 4]}), DecodeError)
        self.assertIsInstance(decode_finger_position({"fingers": [True, 2, 3, 4]}), DecodeError)

    def test_fingers_must_be_array(self):
        self.assertIsInstance(decode_finger_position({"fingers": {"0": 1}}), DecodeError)
        self.assertIsInstance(decode_finger_shortcut({}), DecodeError)


class TestMotionDecoders(unittest.TestCase):

    def test_linear_flick(self):
        self.assertEqual(decode_linear_flick({"flick": "left"}), LinearFlickReading("left"))
        self.assertIsInstance(decode_linear_flick({"flick": None}), DecodeError)

    def test_pyr(self):
        result = decode_pyr({"pitch": 1.5, "yaw": -20, "roll": 0})
        self.assertEqual(result, PYRReading(pitch=1.5, yaw=-20.0, roll=0.0))
        self.assertIsInstance(result.yaw, float)

    def test_pyr_missing_field(self):
        self.assertIsInstance(decode_pyr({"pitch": 1.5, "yaw": -20}), DecodeError)

    def test_number_too_large_for_float(self):
        self.assertIsInstance(decode_pyr({"pitch": 10 ** 400, "yaw": 0, "roll": 0}), DecodeError)
        self.assertIsInstance(decode_quaternion({"quaternion": {"w": 1, "x": 0, "y": 0, "z": -10 ** 400}}), DecodeError)
        self.assertIsInstance(decode_magnetometer({"magnetometer": {"x": 10 ** 400, "y": 0, "z": 0}}), DecodeError)

    def test_quaternion(self):
        result = decode_quaternion({"quaternion": {"w": 1, "x": 0.5, "y": 0.25, "z": 0}})
        self.assertEqual(result, QuaternionReading(Quaternion(1.0, 0.5, 0.25, 0.0)))

    def test_quaternion_mistyped(self):
        self.assertIsInstance(decode_quaternion({"quaternion": [1, 0, 0, 0]}), DecodeError)
        self.assertIsInstance(decode_quaternion({"quaternion": {"w": "1", "x": 0, "y": 0, "z": 0}}), DecodeError)

    def test_vectors(self):
        self.assertEqual(
            decode_accelerometer({"accelerometer": {"x": 0, "y": 0, "z": 9.81}}),
            AccelerometerReading(Vector3(0.0, 0.0, 9.81))
        )
        self.assertEqual(
            decode_gyroscope({"gyroscope": {"x": 1, "y": 2, "z": 3}}),
            GyroscopeReading(Vector3(1.0, 2.0, 3.0))
        )
        self.assertEqual(
            decode_magnetometer({"magnetometer": {"x": -1, "y": -2, "z": -3}}),
            MagnetometerReading(Vector3(-1.0, -2.0, -3.0))
        )

    def test_vector_wrong_key(self):
        """Each vector decoder reads its own field only."""
        self.assertIsInstance(decode_gyroscope({"accelerometer": {"x": 1, "y": 2, "z": 3}}), DecodeError)


class TestDecoderTable(unittest.TestCase):

    def test_nine_fragment_types(self):
        self.assertEqual(set(PAYLOAD_DECODERS), {
            "gestureData", "linearFlickData", "fingerShortcutData", "fingerPositionalData",
            "pyrData", "quaternionData", "accelerometerData", "gyroscopeData", "magnetometerData",
        })

    def test_decoders_never_raise(self):
        junk = [{}, {"fingers": None}, {"quaternion": "q"}, {"pitch": True, "yaw": 1, "roll": 1}]
        for decoder in PAYLOAD_DECODERS.values():
            for fragment in junk:
                self.assertIsInstance(decoder(fragment), DecodeError)


if __name__ == '__main__':
    unittest.main()
