"""Built-in step implementations."""

from .basic import BasicStep
from .conditional import ConditionalStep
from .decorators import step

__all__ = [
    "BasicStep",
    "ConditionalStep",
    "step",
]
