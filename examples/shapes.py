"""Shapes Example for cix.

A flat program (no modules) with a struct, and a global counter that a
helper function updates.

Try it with:
    cix run examples/shapes.py
    cix emit examples/shapes.py
"""

import cix
from cix import Assign, BinaryOp, BinOp, Call, FieldAccess, Literal, Return, StructNew, Var

program = cix.new()

# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------

program = cix.add_struct(program, "Rect", [("width", "int"), ("height", "int")])
program = cix.add_variable(program, "shapes_built", "int", 0)

# -----------------------------------------------------------------------------
# Functions
# -----------------------------------------------------------------------------

program = cix.add_function(
    program,
    "count_shape",
    "void",
    body=[Assign("shapes_built", BinaryOp(BinOp.ADD, Var("shapes_built"), Literal(1)))],
)

rect = StructNew("Rect", (("width", Var("width")), ("height", Var("height"))))
program = cix.add_function(
    program,
    "area",
    "int",
    [("width", "int"), ("height", "int")],
    [
        Call("count_shape"),
        Return(BinaryOp(BinOp.MUL, FieldAccess(rect, "width"), Var("height"))),
    ],
)

program = cix.add_function(
    program,
    "main",
    "int",
    body=[
        Assign("small", Call("area", (Literal(2), Literal(3)))),
        Assign("large", Call("area", (Literal(4), Literal(5)))),
        Call(
            "printf",
            (
                Literal("built %d shapes, total area %d\\n"),
                Var("shapes_built"),
                BinaryOp(BinOp.ADD, Var("small"), Var("large")),
            ),
        ),
        Return(Literal(0)),
    ],
)
