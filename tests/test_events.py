"""Unit tests for subscription scopes."""
import unittest
from unittest.mock import MagicMock

from kaisdk.events import Scope, SubscriptionRegistry
from kaisdk.models import DeviceHandle, EventKind, Gesture, GestureReading, Hand, SDKError

KAI = DeviceHandle(2, Hand.RIGHT)
READING = GestureReading(Gesture.GRAB_END)


class TestSubscriptionRegistry(unittest.TestCase):

    def setUp(self):
        self.subscriptions = SubscriptionRegistry()

    def test_deliver_in_subscription_order(self):
        calls = []
        self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, lambda d, r: calls.append("first"))
        self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, lambda d, r: calls.append("second"))

        delivered = self.subscriptions.deliver(Scope.ANY, EventKind.GESTURE, KAI, READING)

        self.assertEqual(calls, ["first", "second"])
        self.assertEqual(delivered, 2)

    def test_scopes_and_kinds_are_independent(self):
        callback = MagicMock()
        self.subscriptions.subscribe(Scope.DEFAULT, EventKind.GESTURE, callback)

        self.subscriptions.deliver(Scope.DEFAULT_LEFT, EventKind.GESTURE, KAI, READING)
        self.subscriptions.deliver(Scope.DEFAULT, EventKind.PYR, KAI, READING)
        self.subscriptions.deliver(2, EventKind.GESTURE, KAI, READING)
        callback.assert_not_called()

        self.subscriptions.deliver(Scope.DEFAULT, EventKind.GESTURE, KAI, READING)
        callback.assert_called_once_with(KAI, READING)

    def test_device_scope(self):
        callback = MagicMock()
        self.subscriptions.subscribe(2, EventKind.GESTURE, callback)
        self.subscriptions.deliver(3, EventKind.GESTURE, KAI, READING)
        self.subscriptions.deliver(2, EventKind.GESTURE, KAI, READING)
        callback.assert_called_once_with(KAI, READING)

    def test_unsubscribe(self):
        callback = MagicMock()
        unsubscribe = self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, callback)
        unsubscribe()
        unsubscribe()  # safe to call twice

        self.assertEqual(self.subscriptions.deliver(Scope.ANY, EventKind.GESTURE, KAI, READING), 0)
        callback.assert_not_called()
        self.assertEqual(self.subscriptions.subscriber_count(Scope.ANY, EventKind.GESTURE), 0)

    def test_failing_callback_isolated(self):
        after = MagicMock()
        self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, MagicMock(side_effect=ValueError("bad")))
        self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, after)

        with self.assertLogs("kaisdk.events", level="ERROR"):
            delivered = self.subscriptions.deliver(Scope.ANY, EventKind.GESTURE, KAI, READING)

        after.assert_called_once_with(KAI, READING)
        self.assertEqual(delivered, 1)

    def test_unsubscribe_during_delivery(self):
        calls = []

        def once(device, reading):
            calls.append("once")
            unsubscribe()

        unsubscribe = self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, once)
        self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, lambda d, r: calls.append("always"))

        self.subscriptions.deliver(Scope.ANY, EventKind.GESTURE, KAI, READING)
        self.subscriptions.deliver(Scope.ANY, EventKind.GESTURE, KAI, READING)

        self.assertEqual(calls, ["once", "always", "always"])

    def test_error_and_unknown_sinks(self):
        errors = MagicMock()
        unknown = MagicMock()
        self.subscriptions.subscribe_error(errors)
        self.subscriptions.subscribe_unknown_data(unknown)

        error = SDKError(1, "E", "m")
        self.subscriptions.deliver_error(error)
        self.subscriptions.deliver_unknown_data({"type": "x"})

        errors.assert_called_once_with(error)
        unknown.assert_called_once_with({"type": "x"})

    def test_invalid_subscriptions(self):
        with self.assertRaises(ValueError):
            self.subscriptions.subscribe("any", EventKind.GESTURE, MagicMock())
        with self.assertRaises(ValueError):
            self.subscriptions.subscribe(-1, EventKind.GESTURE, MagicMock())
        with self.assertRaises(ValueError):
            self.subscriptions.subscribe(True, EventKind.GESTURE, MagicMock())
        with self.assertRaises(ValueError):
            self.subscriptions.subscribe(Scope.ANY, "gesture", MagicMock())
        with self.assertRaises(TypeError):
            self.subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, None)


if __name__ == '__main__':
    unittest.main()
