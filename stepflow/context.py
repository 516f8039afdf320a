"""Execution context shared by every step and observer of a run.

A new WorkflowContext is created by the engine for each call to
``WorkflowEngine.execute`` and handed to steps and observers by reference.
Steps communicate through ``result`` and ``metadata``; the engine owns
``errors``, ``current_step_name`` and ``end_time``.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .types import WorkflowError


def generate_id() -> str:
    """Generate a unique workflow execution id."""
    return str(uuid.uuid4())


def _describe(failure: Any) -> str:
    if isinstance(failure, BaseException):
        text = _safe_str(failure)
        return text or type(failure).__name__
    return _safe_str(failure)


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


class WorkflowContext:
    """Mutable per-run record of a workflow execution.

    Attributes:
        input: Input data supplied by the caller
        result: Output data, set by the steps
        metadata: Data shared between steps and observers
        errors: Errors recorded during the run, in order
        current_step_name: Name of the last step the engine started
        end_time: When the run completed, None until then

    Example:
        >>> context = WorkflowContext("orders", input={"order_id": 7})
        >>> context.metadata["total"] = 42
        >>> context.complete()
        >>> context.successful
        True
    """

    def __init__(
        self,
        workflow_name: str,
        workflow_id: Optional[str] = None,
        input: Any = None,
        result: Any = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Create a context.

        Args:
            workflow_name: Name of the workflow definition
            workflow_id: Execution id, generated when omitted
            input: Input data for the run
            result: Initial result value
            metadata: Initial metadata (a new dict when omitted)
        """
        self._workflow_id = workflow_id if workflow_id is not None else generate_id()
        self._workflow_name = workflow_name
        self.input = input
        self.result = result
        self.metadata: Dict[str, Any] = metadata if metadata is not None else {}
        self.errors: List[WorkflowError] = []
        self.current_step_name: Optional[str] = None
        self._start_time = datetime.now(timezone.utc)
        self._start_counter = time.perf_counter()
        self.end_time: Optional[datetime] = None
        self._end_counter: Optional[float] = None

    @property
    def workflow_id(self) -> str:
        return self._workflow_id

    @property
    def workflow_name(self) -> str:
        return self._workflow_name

    @property
    def start_time(self) -> datetime:
        return self._start_time

    def add_error(self, step: str, error: Any) -> None:
        """Record an error for a step.

        Exceptions contribute their message; any other value is converted
        with str(). The original value is always kept in ``details``.
        """
        self.errors.append(
            WorkflowError(
                step=step,
                message=_describe(error),
                details=error,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def complete(self) -> None:
        """Mark the run as finished by setting the end time."""
        self.end_time = datetime.now(timezone.utc)
        self._end_counter = time.perf_counter()

    @property
    def duration_ms(self) -> Optional[float]:
        """Elapsed run time in milliseconds, None until completed."""
        if self._end_counter is None:
            return None
        return (self._end_counter - self._start_counter) * 1000

    @property
    def successful(self) -> bool:
        """True while no errors have been recorded."""
        return len(self.errors) == 0

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the context suitable for JSON output."""
        return {
            "workflow_id": self.workflow_id,
            "workflow_name": self.workflow_name,
            "input": self.input,
            "result": self.result,
            "metadata": self.metadata,
            "errors": [error.to_dict() for error in self.errors],
            "current_step_name": self.current_step_name,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_ms": self.duration_ms,
            "successful": self.successful,
        }

    def __repr__(self) -> str:
        return (
            f"WorkflowContext(workflow_name='{self.workflow_name}', "
            f"workflow_id='{self.workflow_id}', errors={len(self.errors)})"
        )
