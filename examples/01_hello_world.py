#!/usr/bin/env python3
"""
EXAMPLE 01: Hello World - your first workflow

What you will see:
✅ @step - turn a function into a workflow step
✅ WorkflowEngine - register steps and run them in order
✅ WorkflowContext - input, result and metadata shared by the steps

Run:
    python examples/01_hello_world.py
"""

import asyncio

from stepflow import WorkflowEngine, step


@step
async def load_user(context):
    """Steps receive the context; async and plain functions both work."""
    await asyncio.sleep(0.01)
    context.metadata["user"] = {"id": context.input["user_id"], "name": "Ada"}


@step
def greet(context):
    user = context.metadata["user"]
    context.result = f"Hello, {user['name']}!"


async def main():
    print("=" * 60)
    print("EXAMPLE 01: Hello World")
    print("=" * 60)

    engine = WorkflowEngine("hello").add_steps([load_user, greet])
    context = await engine.execute({"user_id": 123})

    print(f"  Result:       {context.result}")
    print(f"  Successful:   {context.successful}")
    print(f"  Workflow ID:  {context.workflow_id}")
    print(f"  Duration:     {context.duration_ms:.2f}ms")


if __name__ == "__main__":
    asyncio.run(main())
