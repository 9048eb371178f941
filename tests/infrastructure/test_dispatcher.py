"""Tests for the background notification dispatcher."""

import threading
import time

from agromarket.application.notifications import Notification
from agromarket.infrastructure.notifications.dispatcher import (
    ThreadedNotificationDispatcher,
)
from agromarket.infrastructure.notifications.logging_notifier import LoggingNotifier
from tests.fakes import FakeNotifier


class BlockingNotifier(FakeNotifier):
    """Holds every send until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.release = threading.Event()

    def send(self, notification: Notification) -> str:
        self.release.wait(5)
        return super().send(notification)


def _message(order_id: str = "o1") -> Notification:
    return Notification(
        recipient="farmer@example.com",
        subject="New order",
        html="<p>hi</p>",
        text="hi",
        kind="new-order",
        order_id=order_id,
    )


class TestDelivery:

    def test_delivers_queued_messages(self):
        notifier = FakeNotifier()

        with ThreadedNotificationDispatcher(notifier) as dispatcher:
            dispatcher.submit(_message("o1"))
            dispatcher.submit(_message("o2"))

        assert [n.order_id for n in notifier.sent] == ["o1", "o2"]
        assert dispatcher.dead_letters == []

    def test_retries_with_exponential_backoff(self):
        notifier = FakeNotifier(failures=2)
        delays: list[float] = []

        with ThreadedNotificationDispatcher(
            notifier, max_attempts=3, backoff=0.5, sleep=delays.append
        ) as dispatcher:
            dispatcher.submit(_message())

        assert len(notifier.attempts) == 3
        assert len(notifier.sent) == 1
        assert delays == [0.5, 1.0]

    def test_dead_letters_after_last_attempt(self):
        notifier = FakeNotifier(failures=5)

        with ThreadedNotificationDispatcher(
            notifier, max_attempts=2, sleep=lambda _: None
        ) as dispatcher:
            dispatcher.submit(_message("o9"))

        assert len(notifier.attempts) == 2
        assert notifier.sent == []
        assert [n.order_id for n in dispatcher.dead_letters] == ["o9"]

    def test_unexpected_notifier_error_does_not_stop_worker(self):
        class Exploding(FakeNotifier):
            def send(self, notification):
                if notification.order_id == "bad":
                    raise KeyError("template")
                return super().send(notification)

        notifier = Exploding()
        with ThreadedNotificationDispatcher(notifier) as dispatcher:
            dispatcher.submit(_message("bad"))
            dispatcher.submit(_message("good"))

        assert [n.order_id for n in notifier.sent] == ["good"]
        assert [n.order_id for n in dispatcher.dead_letters] == ["bad"]

    def test_logging_notifier_returns_delivery_id(self):
        assert LoggingNotifier().send(_message()).startswith("log-")


class TestSubmit:

    def test_submit_after_shutdown_is_dropped(self):
        notifier = FakeNotifier()
        dispatcher = ThreadedNotificationDispatcher(notifier)
        dispatcher.shutdown()

        dispatcher.submit(_message())

        assert notifier.attempts == []

    def test_full_queue_drops_without_blocking(self):
        notifier = FakeNotifier()
        # No workers: nothing drains the queue
        dispatcher = ThreadedNotificationDispatcher(notifier, workers=0, queue_size=1)

        dispatcher.submit(_message("kept"))
        dispatcher.submit(_message("dropped"))

        assert [n.order_id for n in dispatcher.dead_letters] == ["dropped"]

    def test_submit_reports_whether_queued(self):
        dispatcher = ThreadedNotificationDispatcher(FakeNotifier())

        assert dispatcher.submit(_message()) is True
        dispatcher.shutdown()
        assert dispatcher.submit(_message()) is False


class TestShutdown:

    def test_full_queue_does_not_hang_shutdown(self):
        notifier = BlockingNotifier()
        dispatcher = ThreadedNotificationDispatcher(notifier, queue_size=1)
        dispatcher.submit(_message("first"))
        dispatcher.submit(_message("second"))

        started = time.monotonic()
        dispatcher.shutdown(timeout=0.2)
        elapsed = time.monotonic() - started

        notifier.release.set()
        assert elapsed < 2.0

    def test_every_accepted_message_is_delivered(self):
        notifier = FakeNotifier()
        dispatcher = ThreadedNotificationDispatcher(notifier, workers=2)
        accepted: list[str] = []
        guard = threading.Lock()
        start = threading.Barrier(5)

        def producer(prefix: str) -> None:
            start.wait()
            for i in range(50):
                order_id = f"{prefix}-{i}"
                if dispatcher.submit(_message(order_id)):
                    with guard:
                        accepted.append(order_id)

        producers = [threading.Thread(target=producer, args=(p,)) for p in "abcd"]
        for t in producers:
            t.start()
        start.wait()
        dispatcher.shutdown(timeout=10)
        for t in producers:
            t.join(10)

        assert sorted(n.order_id for n in notifier.sent) == sorted(accepted)
