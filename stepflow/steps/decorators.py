"""Decorator for defining steps from functions.

    from stepflow import step

    @step
    async def fetch_user(context):
        context.result = await load_user(context.input["user_id"])

    @step("send-welcome")
    def send_welcome(context):
        mailer.send(context.result["email"])

    engine.add_steps([fetch_user, send_welcome])
"""

from typing import Callable, Optional, Union, overload

from ..types import StepExecutor
from .basic import BasicStep


@overload
def step(func: StepExecutor) -> BasicStep: ...


@overload
def step(func: Optional[str] = None, *, name: Optional[str] = None) -> Callable[[StepExecutor], BasicStep]: ...


def step(
    func: Union[StepExecutor, str, None] = None,
    *,
    name: Optional[str] = None,
) -> Union[BasicStep, Callable[[StepExecutor], BasicStep]]:
    """Turn a function of the context into a BasicStep.

    Can be used bare (``@step``), with a positional name (``@step("load")``)
    or with a keyword name (``@step(name="load")``). Without a name, the
    function's ``__name__`` is used.

    Raises:
        TypeError: If the decorated object is not callable
    """
    if isinstance(func, str):
        name = func
        func = None

    def decorator(fn: StepExecutor) -> BasicStep:
        if not callable(fn):
            raise TypeError(
                f"@step can only decorate functions, got {type(fn).__name__}"
            )
        wrapped = BasicStep(name or fn.__name__, fn)
        wrapped.__doc__ = fn.__doc__
        return wrapped

    if func is not None:
        return decorator(func)
    return decorator
