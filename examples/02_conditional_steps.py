#!/usr/bin/env python3
"""
EXAMPLE 02: Conditional steps

What you will see:
✅ ConditionalStep - pick one of two steps from a predicate
✅ Async predicates
✅ Skipping work when the condition is false and there is no else-branch

Run:
    python examples/02_conditional_steps.py
"""

import asyncio

from stepflow import BasicStep, ConditionalStep, WorkflowFactory, step


@step
def price_order(context):
    context.metadata["total"] = sum(item["price"] for item in context.input["items"])


async def is_free(context):
    await asyncio.sleep(0)
    return context.metadata["total"] == 0


@step
def mark_free(context):
    context.result = {"status": "free", "charged": 0}


@step
def charge_card(context):
    context.result = {"status": "charged", "charged": context.metadata["total"]}


def build_workflow():
    return WorkflowFactory.create_workflow(
        "checkout",
        steps=[
            price_order,
            ConditionalStep("charge_or_skip", is_free, mark_free, charge_card),
            ConditionalStep(
                "vip_discount",
                lambda ctx: ctx.input.get("vip", False),
                BasicStep("apply_discount", lambda ctx: ctx.result.update(discount=0.1)),
            ),
        ],
    )


async def main():
    engine = build_workflow()

    paid = await engine.execute({"items": [{"price": 30}, {"price": 12}], "vip": True})
    free = await engine.execute({"items": [{"price": 0}]})

    print(f"Paid order: {paid.result}")
    print(f"Free order: {free.result}")


if __name__ == "__main__":
    asyncio.run(main())
