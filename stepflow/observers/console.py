"""Observer that logs workflow execution."""

import json
import logging
import time
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Union

from ..context import WorkflowContext
from ..observer import WorkflowObserver

_LEVELS = {
    "log": logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _format_input(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        # Non-string keys or circular references
        return repr(value)


@dataclass
class ConsoleObserverOptions:
    """Which events the ConsoleObserver reports, and how.

    Attributes:
        log_step_start: Log when a step starts
        log_step_complete: Log when a step completes
        log_step_error: Log when a step fails
        log_workflow_start: Log when the workflow starts
        log_workflow_complete: Log when the workflow completes
        use_timer: Time steps and the whole workflow, logging elapsed time
        log_level: "info", "debug", "log" (same as info) or a logging level
    """

    log_step_start: bool = True
    log_step_complete: bool = True
    log_step_error: bool = True
    log_workflow_start: bool = True
    log_workflow_complete: bool = True
    use_timer: bool = True
    log_level: Union[str, int] = "info"

    def level(self) -> int:
        if isinstance(self.log_level, int):
            return self.log_level
        try:
            return _LEVELS[self.log_level.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{self.log_level}'. "
                f"Expected one of: {', '.join(_LEVELS)} or a logging level"
            ) from None


class ConsoleObserver(WorkflowObserver):
    """Logs workflow progress through the standard logging module.

    Messages are prefixed with the workflow id. Normal events use the
    configured level; step errors and the final error list use ERROR.

    Example:
        >>> engine.add_observer(ConsoleObserver(log_step_start=False, log_level="debug"))
    """

    def __init__(
        self,
        options: Optional[ConsoleObserverOptions] = None,
        logger: Optional[logging.Logger] = None,
        **overrides: Any,
    ):
        """Create the observer.

        Args:
            options: Options object, defaults to everything enabled
            logger: Logger to write to, defaults to this module's logger
            **overrides: Individual ConsoleObserverOptions fields

        Raises:
            TypeError: If an override is not an option name
            ValueError: If log_level is not recognized
        """
        options = options or ConsoleObserverOptions()
        known = {f.name for f in fields(ConsoleObserverOptions)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown ConsoleObserver options: {', '.join(sorted(unknown))}")

        self.options = replace(options, **overrides)
        self.level = self.options.level()
        self.logger = logger or logging.getLogger(__name__)
        self._timers: Dict[str, float] = {}

    def on_step_start(self, step_name: str, context: WorkflowContext) -> None:
        if self.options.log_step_start:
            self._log(f"[{context.workflow_id}] Starting step: {step_name}")
        self._time(f"[{context.workflow_id}] {step_name}")

    def on_step_complete(self, step_name: str, context: WorkflowContext) -> None:
        self._time_end(f"[{context.workflow_id}] {step_name}")
        if self.options.log_step_complete:
            self._log(f"[{context.workflow_id}] Completed step: {step_name}")

    def on_step_error(self, step_name: str, error: Exception, context: WorkflowContext) -> None:
        self._time_end(f"[{context.workflow_id}] {step_name}")
        if self.options.log_step_error:
            self.logger.error(
                "[%s] Error in step %s: %r", context.workflow_id, step_name, error
            )

    def on_workflow_start(self, context: WorkflowContext) -> None:
        if self.options.log_workflow_start:
            message = f"[{context.workflow_id}] Starting workflow: {context.workflow_name}"
            if context.input is not None:
                message += f" with input: {_format_input(context.input)}"
            self._log(message)
        self._time(f"[{context.workflow_id}] Workflow {context.workflow_name}")

    def on_workflow_complete(self, context: WorkflowContext) -> None:
        self._time_end(f"[{context.workflow_id}] Workflow {context.workflow_name}")
        if not self.options.log_workflow_complete:
            return

        error_count = len(context.errors)
        status = "successfully" if error_count == 0 else f"with {error_count} errors"
        duration = context.duration_ms
        elapsed = f"{duration:.3f}ms" if duration is not None else "unknown time"
        self._log(
            f"[{context.workflow_id}] Workflow {context.workflow_name} "
            f"completed {status} in {elapsed}"
        )

        if error_count:
            self.logger.error(
                "[%s] Workflow errors: %s",
                context.workflow_id,
                [error.to_dict() for error in context.errors],
            )

    def _log(self, message: str) -> None:
        self.logger.log(self.level, message)

    def _time(self, label: str) -> None:
        if self.options.use_timer:
            self._timers[label] = time.perf_counter()

    def _time_end(self, label: str) -> None:
        started = self._timers.pop(label, None)
        if started is None:
            return
        elapsed_ms = (time.perf_counter() - started) * 1000
        self._log(f"{label}: {elapsed_ms:.3f}ms")
