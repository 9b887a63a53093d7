"""
Operation metrics and warning events for OKX client.

Every public client operation leaves one OperationRecord. Failures that an
operation logs and swallows (cleanup cancellations, margin-mode switches)
are published as WarningEvents so callers can observe them without parsing
log output.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationRecord:
    """Outcome and latency of one client operation."""
    name: str  # "POST /trade/order"
    status_code: int
    duration_ms: float
    recorded_at: float

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


@dataclass(frozen=True)
class WarningEvent:
    """A failure that was logged and swallowed by a trading operation."""
    operation: str
    symbol: Optional[str]
    message: str
    timestamp: float


@dataclass
class Statistics:
    """Running totals since the client was created or last reset."""
    operations: int = 0
    failures: int = 0
    warnings: int = 0
    slowest_ms: float = 0.0
    elapsed_ms: float = 0.0

    @property
    def succeeded(self) -> int:
        return self.operations - self.failures

    @property
    def average_ms(self) -> float:
        return self.elapsed_ms / self.operations if self.operations else 0.0

    def add(self, record: OperationRecord) -> None:
        self.operations += 1
        self.elapsed_ms += record.duration_ms
        self.slowest_ms = max(self.slowest_ms, record.duration_ms)
        if not record.ok:
            self.failures += 1


EventListener = Callable[[WarningEvent], None]


class PerformanceMonitor:
    """Collects operation records and fans warning events out to listeners."""

    def __init__(self, max_history: int = 500):
        self._stats = Statistics()
        self._records: Deque[OperationRecord] = deque(maxlen=max_history)
        self._events: Deque[WarningEvent] = deque(maxlen=max_history)
        self._listeners: List[EventListener] = []

    def record_operation(self, name: str, status_code: int, duration_ms: float) -> OperationRecord:
        record = OperationRecord(
            name=name,
            status_code=status_code,
            duration_ms=duration_ms,
            recorded_at=time.time(),
        )
        self._stats.add(record)
        self._records.append(record)
        return record

    def record_warning(self, operation: str, symbol: Optional[str], message: str) -> WarningEvent:
        """Store a swallowed failure and notify subscribers."""
        event = WarningEvent(operation=operation, symbol=symbol, message=message, timestamp=time.time())
        self._stats.warnings += 1
        self._events.append(event)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Warning event listener failed: {e}")
        return event

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def statistics(self) -> Statistics:
        return self._stats

    def recent_operations(self, count: int = 10) -> List[OperationRecord]:
        return list(self._records)[-count:]

    def get_recent_events(self, count: int = 10) -> List[WarningEvent]:
        """Most recent warning events, oldest first."""
        return list(self._events)[-count:]

    def reset(self) -> None:
        self._stats = Statistics()
        self._records.clear()
        self._events.clear()
