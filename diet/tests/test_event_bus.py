import threading
import unittest
from diet.events.Event_Bus import APPOINTMENT_CONFLICT, APPOINTMENT_REQUESTED, EventBus


class TestEventBus(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()
        self.seen = []

    def _record(self, name, payload):
        self.seen.append((name, payload))

    def test_subscribe_publish_unsubscribe(self):
        self.bus.subscribe(APPOINTMENT_REQUESTED, self._record)
        self.bus.subscribe(APPOINTMENT_REQUESTED, self._record)  # no double delivery
        self.assertEqual(self.bus.handler_count(APPOINTMENT_REQUESTED), 1)
        self.assertEqual(self.bus.publish(APPOINTMENT_REQUESTED, {"id": 1}), 1)
        self.assertEqual(self.bus.publish(APPOINTMENT_CONFLICT, {"id": 2}), 0)
        self.assertEqual(self.seen, [(APPOINTMENT_REQUESTED, {"id": 1})])

        self.assertTrue(self.bus.unsubscribe(APPOINTMENT_REQUESTED, self._record))
        self.assertFalse(self.bus.unsubscribe(APPOINTMENT_REQUESTED, self._record))
        self.bus.publish(APPOINTMENT_REQUESTED, {"id": 3})
        self.assertEqual(len(self.seen), 1)

    def test_subscribe_returns_remover(self):
        remove = self.bus.subscribe(APPOINTMENT_CONFLICT, self._record)
        remove()
        self.assertEqual(self.bus.handler_count(APPOINTMENT_CONFLICT), 0)
        self.assertEqual(self.bus.publish(APPOINTMENT_CONFLICT), 0)

    def test_failing_handler_is_isolated(self):
        def broken(name, payload):
            raise RuntimeError("boom")

        self.bus.subscribe(APPOINTMENT_CONFLICT, broken)
        self.bus.subscribe(APPOINTMENT_CONFLICT, self._record)
        with self.assertLogs("diet.events.Event_Bus", level="ERROR"):
            delivered = self.bus.publish(APPOINTMENT_CONFLICT, None)
        self.assertEqual(delivered, 1)
        self.assertEqual(self.seen, [(APPOINTMENT_CONFLICT, None)])

    def test_handler_may_unsubscribe_while_publishing(self):
        def once(name, payload):
            self.bus.unsubscribe(name, once)
            self._record(name, payload)

        self.bus.subscribe(APPOINTMENT_REQUESTED, once)
        self.bus.publish(APPOINTMENT_REQUESTED, 1)
        self.bus.publish(APPOINTMENT_REQUESTED, 2)
        self.assertEqual(self.seen, [(APPOINTMENT_REQUESTED, 1)])

    def test_concurrent_publish(self):
        lock = threading.Lock()
        counter = []

        def count(name, payload):
            with lock:
                counter.append(payload)

        self.bus.subscribe(APPOINTMENT_REQUESTED, count)
        threads = [threading.Thread(target=self.bus.publish, args=(APPOINTMENT_REQUESTED, i)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(sorted(counter), list(range(20)))


if __name__ == '__main__':
    unittest.main()
