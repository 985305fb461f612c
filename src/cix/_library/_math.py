"""The ``math`` module: integer arithmetic helpers."""

from cix._ir import BinaryOp, BinOp, Call, Function, Program, Return, Var, add_module, function, new

MODULE_NAME = "math"

_INT_PAIR = [("x", "int"), ("y", "int")]


def _binary(name: str, op: BinOp) -> Function:
    return function(name, "int", _INT_PAIR, [Return(BinaryOp(op, Var("x"), Var("y")))])


def math_library() -> Program:
    """Build a program fragment holding the ``math`` module.

    Every function is exported: add, subtract, multiply, divide and power.
    ``power`` squares its base and ignores the exponent, as there are no
    loops to repeat a multiplication.
    """
    functions = [
        _binary("add", BinOp.ADD),
        _binary("subtract", BinOp.SUB),
        _binary("multiply", BinOp.MUL),
        _binary("divide", BinOp.DIV),
        function(
            "power",
            "int",
            [("base", "int"), ("exp", "int")],
            [Return(Call("multiply", (Var("base"), Var("base"))))],
        ),
    ]
    return add_module(
        new(),
        MODULE_NAME,
        exports=[func.name for func in functions],
        functions=functions,
    )
