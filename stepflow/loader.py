"""Load workflow engines from ``module:attribute`` references."""

import importlib
import importlib.util
import os
import sys
from types import ModuleType

from .engine import WorkflowEngine
from .types import WorkflowLoadError


def _import_file(target: str, path: str) -> ModuleType:
    if not os.path.isfile(path):
        raise WorkflowLoadError(target, f"file '{path}' does not exist")

    module_name = "_stepflow_target_" + os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise WorkflowLoadError(target, f"cannot import '{path}'")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise WorkflowLoadError(target, f"error while importing: {e!r}") from e
    return module


def load_workflow(target: str) -> WorkflowEngine:
    """Resolve a target reference into a WorkflowEngine.

    Args:
        target: ``package.module:attr`` or ``path/to/file.py:attr``. The
            attribute is either a WorkflowEngine or a zero-argument
            callable returning one.

    Returns:
        The engine

    Raises:
        WorkflowLoadError: If the module or attribute cannot be resolved, or
            importing the module or calling the factory raises

    Example:
        >>> engine = load_workflow("myapp.workflows:build_order_workflow")
    """
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise WorkflowLoadError(target, "expected 'module:attribute' or 'file.py:attribute'")

    if module_ref.endswith(".py"):
        module = _import_file(target, module_ref)
    else:
        try:
            module = importlib.import_module(module_ref)
        except ImportError as e:
            raise WorkflowLoadError(target, f"cannot import module '{module_ref}': {e}") from e
        except Exception as e:
            raise WorkflowLoadError(target, f"error while importing: {e!r}") from e

    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise WorkflowLoadError(target, f"module has no attribute '{attr}'") from None

    if not isinstance(obj, WorkflowEngine) and callable(obj):
        try:
            obj = obj()
        except Exception as e:
            raise WorkflowLoadError(target, f"'{attr}' raised {e!r}") from e

    if not isinstance(obj, WorkflowEngine):
        raise WorkflowLoadError(
            target, f"expected a WorkflowEngine, got {type(obj).__name__}"
        )
    return obj
