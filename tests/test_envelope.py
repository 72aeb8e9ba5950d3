"""Unit tests for the envelope decoder and envelope body decoders."""
import unittest

from kaisdk.models import Hand, SDKError
from kaisdk.protocol import (
    ConnectedKai,
    DecodeError,
    Envelope,
    IncomingData,
    decode_authentication,
    decode_connected_kais,
    decode_envelope,
    decode_incoming_data,
    decode_sdk_error,
)


class TestDecodeEnvelope(unittest.TestCase):

    def test_success_envelope(self):
        raw = '{"success": true, "type": "authentication", "authenticated": true}'
        env = decode_envelope(raw)
        self.assertIsInstance(env, Envelope)
        self.assertEqual(env.type, "authentication")
        self.assertTrue(env.success)
        self.assertEqual(env.body["authenticated"], True)
        self.assertEqual(env.raw, raw)

    def test_bytes_input(self):
        env = decode_envelope(b'{"success": true, "type": "connectedKais", "kais": []}')
        self.assertEqual(env.type, "connectedKais")

    def test_failure_envelope_without_type(self):
        env = decode_envelope('{"success": false, "errorCode": 3, "error": "E", "message": "m"}')
        self.assertIsInstance(env, Envelope)
        self.assertFalse(env.success)
        self.assertIsNone(env.type)

    def test_malformed_inputs(self):
        for raw in ['', '{', 'null', '42', '[{"success": true}]', '{"type": "x"}',
                    '{"success": "yes", "type": "x"}', '{"success": true}',
                    '{"success": true, "type": 5}', b'\xc3\x28', None,
                    '[' * 200000, '{"a":' * 200000]:
            result = decode_envelope(raw)
            self.assertIsInstance(result, DecodeError, raw)
            self.assertIs(result.raw, raw)


class TestBodyDecoders(unittest.TestCase):

    def test_sdk_error(self):
        env = decode_envelope('{"success": false, "errorCode": 401, "error": "Unauthorised", "message": "bad secret"}')
        self.assertEqual(decode_sdk_error(env), SDKError(401, "Unauthorised", "bad secret"))

    def test_sdk_error_missing_field(self):
        env = decode_envelope('{"success": false, "errorCode": 401, "error": "Unauthorised"}')
        self.assertIsInstance(decode_sdk_error(env), DecodeError)

    def test_authentication(self):
        env = decode_envelope('{"success": true, "type": "authentication", "authenticated": true}')
        self.assertIs(decode_authentication(env), True)
        env = decode_envelope('{"success": true, "type": "authentication"}')
        self.assertIsInstance(decode_authentication(env), DecodeError)

    def test_incoming_data(self):
        env = decode_envelope(
            '{"success": true, "type": "incomingData", "foregroundProcess": "chrome", "kaiId": 2,'
            ' "defaultKai": true, "data": [{"type": "pyrData"}]}'
        )
        self.assertEqual(decode_incoming_data(env), IncomingData(
            foreground_process="chrome",
            kai_id=2,
            default_kai=True,
            default_left_kai=False,
            default_right_kai=False,
            fragments=({"type": "pyrData"},),
        ))

    def test_incoming_data_requires_data_array(self):
        env = decode_envelope(
            '{"success": true, "type": "incomingData", "foregroundProcess": "chrome", "kaiId": 2, "data": {}}'
        )
        self.assertIsInstance(decode_incoming_data(env), DecodeError)

    def test_connected_kais(self):
        env = decode_envelope(
            '{"success": true, "type": "connectedKais", "kais": ['
            '{"kaiId": 0, "hand": "Left", "defaultKai": true},'
            '{"kaiId": 1, "hand": "RIGHT", "defaultRightKai": true},'
            '{"kaiId": 2, "hand": "both"}]}'
        )
        self.assertEqual(decode_connected_kais(env), (
            ConnectedKai(0, Hand.LEFT, default_kai=True),
            ConnectedKai(1, Hand.RIGHT, default_right_kai=True),
            ConnectedKai(2, Hand.LEFT),
        ))

    def test_connected_kais_rejects_whole_list(self):
        env = decode_envelope(
            '{"success": true, "type": "connectedKais", "kais": [{"kaiId": 0}, {"hand": "left"}]}'
        )
        self.assertIsInstance(decode_connected_kais(env), DecodeError)


if __name__ == '__main__':
    unittest.main()
