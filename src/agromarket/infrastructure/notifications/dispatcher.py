"""Background delivery of notifications.

``submit()`` only enqueues.  Worker threads drain the queue, retrying a
failed send with exponential backoff; a message that exhausts its
attempts is logged and kept in a small dead-letter ring for inspection.
A full queue drops the message rather than blocking the caller.
"""

from __future__ import annotations

import queue
import threading
import time
from collections import deque

import structlog

from agromarket.application.notifications import (
    Notification,
    NotificationDispatcher,
    NotificationError,
    Notifier,
)

logger = structlog.get_logger(__name__)

_STOP = object()


class ThreadedNotificationDispatcher(NotificationDispatcher):

    def __init__(
        self,
        notifier: Notifier,
        workers: int = 1,
        max_attempts: int = 3,
        backoff: float = 0.5,
        queue_size: int = 1000,
        dead_letter_size: int = 100,
        sleep=time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._notifier = notifier
        self._max_attempts = max_attempts
        self._backoff = backoff
        self._sleep = sleep
        self._queue: queue.Queue = queue.Queue(maxsize=queue_size)
        self._dead_letters: deque[Notification] = deque(maxlen=dead_letter_size)
        self._closed = False
        self._lock = threading.Lock()
        self._threads = [
            threading.Thread(
                target=self._run,
                name=f"notification-worker-{i}",
                daemon=True,
            )
            for i in range(workers)
        ]
        for thread in self._threads:
            thread.start()

    def __enter__(self) -> ThreadedNotificationDispatcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    @property
    def dead_letters(self) -> list[Notification]:
        return list(self._dead_letters)

    def submit(self, notification: Notification) -> bool:
        # Holding the lock keeps messages ahead of the stop sentinels
        with self._lock:
            if self._closed:
                logger.warning(
                    "notification.dropped",
                    reason="dispatcher closed",
                    kind=notification.kind,
                    order_id=notification.order_id,
                )
                return False
            try:
                self._queue.put_nowait(notification)
            except queue.Full:
                logger.error(
                    "notification.dropped",
                    reason="queue full",
                    kind=notification.kind,
                    order_id=notification.order_id,
                )
                self._dead_letters.append(notification)
                return False
        logger.info(
            "notification.queued",
            kind=notification.kind,
            recipient=notification.recipient,
            order_id=notification.order_id,
        )
        return True

    def shutdown(self, wait: bool = True, timeout: float | None = 30.0) -> None:
        """Stop accepting messages; optionally wait for the queue to drain.

        ``timeout`` bounds both queueing the stop sentinels and joining the
        workers, so a full queue cannot hang the caller.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        deadline = None if timeout is None else time.monotonic() + timeout
        for _ in self._threads:
            # Sentinels queue behind pending messages, so workers drain first
            try:
                self._queue.put(_STOP, timeout=self._remaining(deadline))
            except queue.Full:
                logger.warning(
                    "notification.shutdown_timeout",
                    pending=self._queue.qsize(),
                    timeout=timeout,
                )
                return
        if wait:
            for thread in self._threads:
                thread.join(self._remaining(deadline))

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    # --- Worker ---------------------------------------------------------------

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._deliver(item)
            finally:
                self._queue.task_done()

    def _deliver(self, notification: Notification) -> None:
        for attempt in range(1, self._max_attempts + 1):
            try:
                delivery_id = self._notifier.send(notification)
            except NotificationError as exc:
                if attempt == self._max_attempts:
                    logger.error(
                        "notification.dead_lettered",
                        kind=notification.kind,
                        recipient=notification.recipient,
                        order_id=notification.order_id,
                        attempts=attempt,
                        error=str(exc),
                    )
                    self._dead_letters.append(notification)
                    return
                delay = self._backoff * (2 ** (attempt - 1))
                logger.warning(
                    "notification.retry",
                    kind=notification.kind,
                    order_id=notification.order_id,
                    attempt=attempt,
                    delay=delay,
                    error=str(exc),
                )
                self._sleep(delay)
            except Exception:
                # A notifier bug must not kill the worker
                logger.exception(
                    "notification.dead_lettered",
                    kind=notification.kind,
                    order_id=notification.order_id,
                    attempts=attempt,
                )
                self._dead_letters.append(notification)
                return
            else:
                logger.info(
                    "notification.sent",
                    kind=notification.kind,
                    recipient=notification.recipient,
                    order_id=notification.order_id,
                    delivery_id=delivery_id,
                    attempts=attempt,
                )
                return
