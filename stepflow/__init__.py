"""stepflow - a small async workflow engine.

Runs named steps in order against a shared, mutable context and reports
the lifecycle to observers.

Example:
    from stepflow import ConsoleObserver, PerformanceObserver, WorkflowEngine, step

    @step
    async def fetch_user(context):
        context.metadata["user"] = {"id": context.input["user_id"], "name": "Ada"}

    @step
    def greet(context):
        context.result = f"Hello, {context.metadata['user']['name']}!"

    engine = (
        WorkflowEngine("greeting")
        .add_steps([fetch_user, greet])
        .add_observers([ConsoleObserver(), PerformanceObserver()])
    )

    context = await engine.execute({"user_id": 123})
    print(context.result)        # Hello, Ada!
    print(context.successful)    # True
    print(context.metadata["performance"]["summary"])

Failures do not raise out of execute(); they are recorded in
context.errors. Pass continue_on_error=True to keep running after a
failing step.
"""

__version__ = "0.1.0"

# Core
from .context import WorkflowContext, generate_id
from .engine import WorkflowEngine, WorkflowEngineOptions
from .observer import WorkflowObserver
from .step import WorkflowStep

# Types
from .types import (
    ConditionFn,
    ObserverEvent,
    StepExecutor,
    StepflowError,
    WorkflowConfigurationError,
    WorkflowError,
    WorkflowLoadError,
)

# Steps
from .steps import BasicStep, ConditionalStep, step

# Observers
from .observers import ConsoleObserver, ConsoleObserverOptions, PerformanceObserver

# Factory
from .factory import WorkflowFactory, create_workflow

# Public API
__all__ = [
    # Version
    "__version__",
    # Core
    "WorkflowContext",
    "WorkflowEngine",
    "WorkflowEngineOptions",
    "WorkflowObserver",
    "WorkflowStep",
    "generate_id",
    # Types
    "ConditionFn",
    "ObserverEvent",
    "StepExecutor",
    "WorkflowError",
    # Exceptions
    "StepflowError",
    "WorkflowConfigurationError",
    "WorkflowLoadError",
    # Steps
    "BasicStep",
    "ConditionalStep",
    "step",
    # Observers
    "ConsoleObserver",
    "ConsoleObserverOptions",
    "PerformanceObserver",
    # Factory
    "WorkflowFactory",
    "create_workflow",
]
