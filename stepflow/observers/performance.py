"""Observer that records step durations into the context metadata."""

import time
from typing import Any, Callable, Dict, Optional, Tuple

from ..context import WorkflowContext
from ..observer import WorkflowObserver

PERFORMANCE_KEY = "performance"


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class PerformanceObserver(WorkflowObserver):
    """Tracks how long each step takes.

    Durations are written to ``context.metadata["performance"]``::

        {
            "steps": {"load": 12.5, "save": 3.1},
            "summary": {"total": 15.6, "average": 7.8, "max": 12.5, "min": 3.1, "count": 2},
            "steps_by_duration": {"load": 12.5, "save": 3.1},
        }

    ``summary`` and ``steps_by_duration`` are added when the workflow
    completes, provided at least one step duration was recorded. Failed
    steps are timed like successful ones.

    Start times are kept on the observer (not in the context), keyed by
    workflow id and step name, so one observer can watch several runs.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """Create the observer.

        Args:
            clock: Zero-argument callable returning the current time in
                milliseconds. Defaults to a monotonic clock.
        """
        self.clock = clock or _monotonic_ms
        self._step_start_times: Dict[Tuple[str, str], float] = {}

    @staticmethod
    def _key(step_name: str, context: WorkflowContext) -> Tuple[str, str]:
        return (context.workflow_id, step_name)

    def on_step_start(self, step_name: str, context: WorkflowContext) -> None:
        self._step_start_times[self._key(step_name, context)] = self.clock()

    def on_step_complete(self, step_name: str, context: WorkflowContext) -> None:
        start_time = self._step_start_times.pop(self._key(step_name, context), None)
        if start_time is None:
            return

        duration = self.clock() - start_time
        self._record_step_duration(step_name, duration, context)

    def on_step_error(self, step_name: str, error: Exception, context: WorkflowContext) -> None:
        # Failed steps still get a duration
        self.on_step_complete(step_name, context)

    def on_workflow_complete(self, context: WorkflowContext) -> None:
        metrics = self.get_performance_metrics(context)
        steps = metrics.get("steps")
        if not steps:
            return

        durations = list(steps.values())
        total = sum(durations)
        metrics["summary"] = {
            "total": total,
            "average": total / len(durations),
            "max": max(durations),
            "min": min(durations),
            "count": len(durations),
        }

        # sorted() is stable, so equal durations keep insertion order
        metrics["steps_by_duration"] = dict(
            sorted(steps.items(), key=lambda item: item[1], reverse=True)
        )

    def _record_step_duration(
        self, step_name: str, duration: float, context: WorkflowContext
    ) -> None:
        metrics = context.metadata.setdefault(PERFORMANCE_KEY, {})
        metrics.setdefault("steps", {})[step_name] = duration

    @staticmethod
    def get_performance_metrics(context: WorkflowContext) -> Dict[str, Any]:
        """Return the performance metrics recorded in a context.

        Returns an empty ``{"steps": {}}`` structure when nothing was
        recorded; that structure is not attached to the context.
        """
        return context.metadata.get(PERFORMANCE_KEY) or {"steps": {}}
