"""
Structured telemetry for hook runs.
[CTX:PBI-1:1-4:TELEM]

Each hook invocation records one event describing:
- Which hook ran and against what target
- The outcome of the run
- The offending field and story position for validation failures
- How long the run took
"""
import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .outcome import HookOutcome

logger = logging.getLogger(__name__)


class TelemetryLevel(Enum):
    """Telemetry verbosity levels."""
    INFO = "info"
    DEBUG = "debug"


# Outcomes worth surfacing at INFO level
_NOTABLE_OUTCOMES = {
    HookOutcome.ADVISORY.value,
    HookOutcome.VALIDATION_ERROR.value,
    HookOutcome.IO_ERROR.value,
}


# [CTX:PBI-1:1-4:TELEM] Telemetry event structure
@dataclass
class HookEvent:
    """
    A single telemetry event capturing one hook run.

    Attributes:
        timestamp: ISO 8601 timestamp of event
        hook: Hook name ("commit_message" or "prd_document")
        target: What was checked (document path or commit source)
        outcome: HookOutcome value
        field: Offending field for validation failures
        story_index: 1-based story position for story-level failures
        elapsed_ms: Run duration in milliseconds
    """
    timestamp: str
    hook: str
    target: str
    outcome: str
    field: Optional[str] = None
    story_index: Optional[int] = None
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging, dropping unset fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def to_keyvalue(self) -> str:
        """Convert event to key=value format."""
        return " ".join(f"{key}={value}" for key, value in self.to_dict().items())


@dataclass
class TelemetryStats:
    """Aggregated statistics over recorded hook runs."""
    total_runs: int = 0
    total_elapsed_time: float = 0.0
    outcomes: Dict[str, int] = field(default_factory=dict)
    failed_fields: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        avg_latency = (
            self.total_elapsed_time / self.total_runs
            if self.total_runs > 0
            else 0.0
        )
        return {
            "total_runs": self.total_runs,
            "avg_elapsed_ms": round(avg_latency, 2),
            "outcomes": self.outcomes,
            "failed_fields": self.failed_fields,
        }


# [CTX:PBI-1:1-4:TELEM] Main telemetry recorder
class TelemetryRecorder:
    """
    Records and emits structured telemetry for hook runs.

    Features:
    - Structured logging in JSON or key=value format
    - Configurable verbosity (info/debug)
    - In-memory statistics and event history
    """

    def __init__(
        self,
        level: TelemetryLevel = TelemetryLevel.DEBUG,
        format_json: bool = True,
    ):
        self.level = level
        self.format_json = format_json

        self._lock = threading.Lock()
        self._stats = TelemetryStats()
        self._events: List[HookEvent] = []

    def record(self, event: HookEvent) -> None:
        """Log the event and add it to history and statistics."""
        if self.format_json:
            log_message = f"[TELEM] {event.to_json()}"
        else:
            log_message = f"[TELEM] {event.to_keyvalue()}"

        if self.level == TelemetryLevel.INFO and event.outcome in _NOTABLE_OUTCOMES:
            logger.info(log_message)
        else:
            logger.debug(log_message)

        with self._lock:
            self._stats.total_runs += 1
            self._stats.total_elapsed_time += event.elapsed_ms
            self._stats.outcomes[event.outcome] = (
                self._stats.outcomes.get(event.outcome, 0) + 1
            )
            if event.field:
                self._stats.failed_fields[event.field] = (
                    self._stats.failed_fields.get(event.field, 0) + 1
                )
            self._events.append(event)

    def get_stats(self) -> TelemetryStats:
        """Get current statistics snapshot."""
        with self._lock:
            return TelemetryStats(
                total_runs=self._stats.total_runs,
                total_elapsed_time=self._stats.total_elapsed_time,
                outcomes=self._stats.outcomes.copy(),
                failed_fields=self._stats.failed_fields.copy(),
            )

    def get_events(self) -> List[HookEvent]:
        """Get all recorded events."""
        with self._lock:
            return self._events.copy()

    def reset(self) -> None:
        """Clear statistics and event history."""
        with self._lock:
            self._stats = TelemetryStats()
            self._events.clear()


_global_recorder: Optional[TelemetryRecorder] = None
_recorder_lock = threading.Lock()


def get_recorder() -> TelemetryRecorder:
    """
    Get the global telemetry recorder instance.

    Creates a default recorder if none exists.
    """
    global _global_recorder

    if _global_recorder is None:
        with _recorder_lock:
            if _global_recorder is None:
                _global_recorder = TelemetryRecorder()

    return _global_recorder


def set_recorder(recorder: TelemetryRecorder) -> None:
    """Set the global telemetry recorder instance."""
    global _global_recorder

    with _recorder_lock:
        _global_recorder = recorder


def create_event(
    hook: str,
    target: str,
    outcome: HookOutcome,
    field: Optional[str] = None,
    story_index: Optional[int] = None,
    elapsed_ms: float = 0.0,
) -> HookEvent:
    """Helper to create a hook event stamped with the current UTC time."""
    return HookEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        hook=hook,
        target=target,
        outcome=outcome.value,
        field=field,
        story_index=story_index,
        elapsed_ms=elapsed_ms,
    )
