"""The ``io`` module: printf wrappers for integer output."""

from cix._ir import Call, Literal, Program, Var, add_module, function, new

MODULE_NAME = "io"


def _printf(fmt: str, *names: str) -> Call:
    return Call("printf", (Literal(fmt), *(Var(name) for name in names)))


def io_library() -> Program:
    """Build a program fragment holding the ``io`` module.

    Callers emitting C must include ``stdio.h`` themselves.
    """
    functions = [
        function("print_int", "void", [("value", "int")], [_printf("Value: %d\\n", "value")]),
        function(
            "print_two_ints",
            "void",
            [("a", "int"), ("b", "int")],
            [_printf("A: %d, B: %d\\n", "a", "b")],
        ),
        function(
            "print_calculation_result",
            "void",
            [("operation", "int"), ("a", "int"), ("b", "int"), ("result", "int")],
            [_printf("Operation %d: %d and %d = %d\\n", "operation", "a", "b", "result")],
        ),
    ]
    return add_module(
        new(),
        MODULE_NAME,
        exports=[func.name for func in functions],
        functions=functions,
    )
