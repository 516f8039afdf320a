#!/usr/bin/env python3
"""
EXAMPLE 04: Measuring step durations

What you will see:
✅ PerformanceObserver - per-step durations in context.metadata["performance"]
✅ A custom observer written as a WorkflowObserver subclass
✅ Running the same workflow from the CLI:

    stepflow run examples/04_performance.py:build_workflow --performance

Run:
    python examples/04_performance.py
"""

import asyncio

from stepflow import PerformanceObserver, WorkflowEngine, WorkflowObserver, step


@step
async def fetch_data(context):
    await asyncio.sleep(0.05)
    context.metadata["rows"] = list(range(100))


@step
async def transform(context):
    await asyncio.sleep(0.02)
    context.metadata["rows"] = [row * 2 for row in context.metadata["rows"]]


@step
async def store(context):
    await asyncio.sleep(0.01)
    context.result = {"stored": len(context.metadata["rows"])}


class ProgressObserver(WorkflowObserver):
    """Prints a line per finished step."""

    def __init__(self, total_steps):
        self.total_steps = total_steps
        self.done = 0

    def on_step_complete(self, step_name, context):
        self.done += 1
        print(f"  [{self.done}/{self.total_steps}] {step_name}")


def build_workflow():
    return WorkflowEngine("etl").add_steps([fetch_data, transform, store])


async def main():
    engine = build_workflow()
    engine.add_observers([PerformanceObserver(), ProgressObserver(len(engine.steps))])

    context = await engine.execute()

    performance = context.metadata["performance"]
    print(f"\nResult: {context.result}")
    print(f"Total:  {performance['summary']['total']:.1f}ms")
    print("Slowest first:")
    for name, duration in performance["steps_by_duration"].items():
        print(f"  {name:<12} {duration:.1f}ms")


if __name__ == "__main__":
    asyncio.run(main())
