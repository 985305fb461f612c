"""Calculator Example for cix.

This example links a user module against the bundled libraries:
- math provides the arithmetic
- io prints results with printf
- geometry builds on math

Try it with:
    cix check examples/calculator.py
    cix run examples/calculator.py
    cix emit examples/calculator.py -o build/calculator.c
"""

import cix
from cix import Assign, Call, Literal, Return, Statement, Var

# Operation codes printed by print_calculation_result
ADD = 1
MULTIPLY = 2


def _report(operation: int, a: int, b: int, function: str) -> list[Statement]:
    result = f"{function}_result"
    return [
        Assign(result, Call(function, (Literal(a), Literal(b)))),
        Call("print_calculation_result", (Literal(operation), Literal(a), Literal(b), Var(result))),
    ]


calculator = cix.module(
    "calculator",
    imports={
        "math": ["add", "multiply"],
        "io": ["print_calculation_result", "print_int"],
        "geometry": ["rectangle_area"],
    },
    functions=[
        cix.function(
            "main",
            "int",
            body=[
                *_report(ADD, 10, 5, "add"),
                *_report(MULTIPLY, 6, 7, "multiply"),
                Call("print_int", (Call("rectangle_area", (Literal(10), Literal(5))),)),
                Return(Literal(0)),
            ],
        ),
    ],
)

program = cix.create_program(
    [cix.math_library(), cix.io_library(), cix.geometry_library(), cix.Program(modules=(calculator,))],
)
