"""Local variable inference for emitted C functions."""

from collections.abc import Iterable

from cix._ir import Assign, Function

# Inferred locals are always declared with this type; no real type inference is done.
LOCAL_TYPE = "int"


def infer_locals(func: Function, global_names: Iterable[str]) -> list[str]:
    """Collect the names a function needs to declare as locals.

    A local is any ``Assign`` target in the body that is neither a parameter
    nor a global (program or module) variable. Each name appears once, in
    order of first assignment.

    Args:
        func: The function to inspect.
        global_names: Names declared at file scope.

    Returns:
        Local variable names in first-appearance order.

    """
    excluded = set(func.param_names) | set(global_names)
    assigned = (stmt.name for stmt in func.body if isinstance(stmt, Assign))
    return [name for name in dict.fromkeys(assigned) if name not in excluded]
