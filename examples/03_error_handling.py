#!/usr/bin/env python3
"""
EXAMPLE 03: Error handling

What you will see:
✅ Step failures are recorded in context.errors, execute() never raises
✅ continue_on_error=False (default) stops at the first failure
✅ continue_on_error=True runs every step and collects all errors
✅ ConsoleObserver logging the run

Run:
    python examples/03_error_handling.py
"""

import asyncio
import logging

from stepflow import ConsoleObserver, WorkflowEngine, step

logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")


@step
def validate_email(context):
    if "@" not in context.input["email"]:
        raise ValueError(f"invalid email: {context.input['email']}")


@step
def validate_age(context):
    if context.input["age"] < 18:
        raise ValueError("user must be an adult")


@step
def create_account(context):
    context.result = {"account": context.input["email"]}


def build(continue_on_error):
    return (
        WorkflowEngine("signup", continue_on_error=continue_on_error)
        .add_steps([validate_email, validate_age, create_account])
        .add_observer(ConsoleObserver(log_step_start=False, use_timer=False))
    )


async def main():
    bad_input = {"email": "nobody", "age": 12}

    print("\n--- stop on first error ---")
    context = await build(continue_on_error=False).execute(bad_input)
    print(f"Errors: {[(e.step, e.message) for e in context.errors]}")
    print(f"Last step started: {context.current_step_name}")

    print("\n--- continue on error ---")
    context = await build(continue_on_error=True).execute(bad_input)
    print(f"Errors: {[(e.step, e.message) for e in context.errors]}")
    print(f"Result: {context.result}")


if __name__ == "__main__":
    asyncio.run(main())
