"""Caller-owned store around the stateless engine.

The desk owns everything the engine deliberately does not: the pending queue,
processed history, the action log and the notification feed. Each feed is
newest first and trimmed to its configured limit.
"""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from ..core.config import AutopilotConfig, DeskConfig
from ..core.exceptions import MessageNotFoundError
from ..core.logger import get_logger
from ..core.models import AutomationRun, LogEntry, Message, Notification, ProcessedResult
from .engine import AutomationEngine
from .registry import WorkflowRegistry
from .results import compute_velocity

logger = get_logger("automation.desk")


@dataclass(frozen=True)
class DeskStats:
    """Headline counters for a desk."""

    queue: int
    completed: int
    notifications: int
    velocity: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "queue": self.queue,
            "completed": self.completed,
            "notifications": self.notifications,
            "velocity": self.velocity,
        }


class AutomationDesk:
    """Pending queue plus bounded history feeds, driven by an engine."""

    def __init__(
        self,
        engine: AutomationEngine,
        registry: WorkflowRegistry,
        config: DeskConfig | None = None,
        velocity_window: int | None = None,
    ) -> None:
        self.engine = engine
        self.registry = registry
        self.config = config or DeskConfig()
        self.velocity_window = velocity_window or engine.config.velocity_window

        self._pending: deque[Message] = deque()
        self._history: deque[ProcessedResult] = deque(maxlen=self.config.history_limit)
        self._logs: deque[LogEntry] = deque(maxlen=self.config.log_limit)
        self._notifications: deque[Notification] = deque(maxlen=self.config.notification_limit)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AutopilotConfig, **engine_kwargs: Any) -> AutomationDesk:
        """Wire an engine, a registry and a desk from one config."""
        engine = AutomationEngine.from_config(config, **engine_kwargs)
        return cls(engine, WorkflowRegistry.from_config(config), config.desk)

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------
    def ingest(self, message: Message) -> None:
        """Put a message at the front of the pending queue."""
        with self._lock:
            self._pending.appendleft(message)
        logger.info("New email ingested: %s", message.subject)

    def pending(self) -> list[Message]:
        with self._lock:
            return list(self._pending)

    def discard(self, message_id: str) -> Message:
        """Drop a pending message without processing it."""
        message = self._take(message_id)
        logger.info("Discarded message '%s'", message_id)
        return message

    def _take(self, message_id: str | None) -> Message:
        with self._lock:
            if not self._pending:
                raise MessageNotFoundError(message_id or "<empty queue>")
            if message_id is None:
                return self._pending.popleft()
            for message in self._pending:
                if message.id == message_id:
                    self._pending.remove(message)
                    return message
        raise MessageNotFoundError(message_id)

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------
    def _record(self, run: AutomationRun) -> None:
        with self._lock:
            self._history.appendleft(run.result)
            # extendleft reverses its input; keep generation order at the front
            self._logs.extendleft(reversed(run.logs))
            self._notifications.extendleft(reversed(run.notifications))

    def process(self, message_id: str | None = None) -> AutomationRun:
        """Run the engine on one pending message and record the outcome.

        Args:
            message_id: Message to process; the first pending one when omitted

        Raises:
            MessageNotFoundError: If the message is not pending
        """
        message = self._take(message_id)
        try:
            run = self.engine.evaluate(message, self.registry)
        except Exception:
            # Put it back so the caller may retry or discard it
            with self._lock:
                self._pending.appendleft(message)
            raise
        self._record(run)
        return run

    def process_all(self, max_workers: int | None = None) -> list[AutomationRun]:
        """Drain the pending queue using a bounded worker pool.

        Returns:
            Runs in the order the messages were queued (front first)
        """
        with self._lock:
            batch = list(self._pending)
            self._pending.clear()
        if not batch:
            return []

        workers = max_workers or self.config.max_workers
        logger.info("Processing %d message(s) with %d worker(s)", len(batch), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self.engine.evaluate, message, self.registry) for message in batch
            ]
            runs: list[AutomationRun] = []
            failed: list[Message] = []
            for message, future in zip(batch, futures):
                try:
                    runs.append(future.result())
                except Exception as exc:
                    logger.error("Automation failed for message '%s': %s", message.id, exc)
                    failed.append(message)

        # Record oldest first so the newest run ends up at the front of every feed
        for run in reversed(runs):
            self._record(run)
        if failed:
            with self._lock:
                self._pending.extendleft(reversed(failed))
        return runs

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------
    def history(self) -> list[ProcessedResult]:
        with self._lock:
            return list(self._history)

    def action_log(self) -> list[LogEntry]:
        with self._lock:
            return list(self._logs)

    def notifications(self) -> list[Notification]:
        with self._lock:
            return list(self._notifications)

    def stats(self) -> DeskStats:
        """Queue size, processed count, notification feed size and velocity."""
        with self._lock:
            return DeskStats(
                queue=len(self._pending),
                completed=len(self._history),
                notifications=len(self._notifications),
                velocity=compute_velocity(self._history, self.velocity_window),
            )
