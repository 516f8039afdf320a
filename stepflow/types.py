"""Type definitions for stepflow."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Union

if TYPE_CHECKING:
    from .context import WorkflowContext


class ObserverEvent(str, Enum):
    """Lifecycle callbacks an observer may implement."""

    STEP_START = "on_step_start"
    STEP_COMPLETE = "on_step_complete"
    STEP_ERROR = "on_step_error"
    WORKFLOW_START = "on_workflow_start"
    WORKFLOW_COMPLETE = "on_workflow_complete"


# Step body: plain function or coroutine function taking the context
StepExecutor = Callable[["WorkflowContext"], Union[None, Awaitable[None]]]

# Branch predicate, may also be async
ConditionFn = Callable[["WorkflowContext"], Union[bool, Awaitable[bool]]]


@dataclass
class WorkflowError:
    """Error recorded against a step during a run.

    Attributes:
        step: Name of the step that failed
        message: Human-readable error text
        details: The original failure value (usually the exception)
        timestamp: When the error was recorded (UTC)
    """

    step: str
    message: str
    details: Any
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        details = self.details
        if not isinstance(details, (str, int, float, bool, type(None), list, dict)):
            details = repr(details)
        return {
            "step": self.step,
            "message": self.message,
            "details": details,
            "timestamp": self.timestamp.isoformat(),
        }


# Exceptions


class StepflowError(Exception):
    """Base exception for stepflow."""

    pass


class WorkflowConfigurationError(StepflowError):
    """Raised when engine options are invalid."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"Invalid workflow configuration: {', '.join(errors)}")


class WorkflowLoadError(StepflowError):
    """Raised when a workflow cannot be loaded from a target reference."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot load workflow '{target}': {reason}")
