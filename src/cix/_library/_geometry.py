"""The ``geometry`` module, built on top of ``math``."""

from cix._ir import Assign, Call, Literal, Program, Return, Var, add_module, function, new

from ._math import MODULE_NAME as MATH

MODULE_NAME = "geometry"


def _call(name: str, *args: str | int) -> Call:
    return Call(name, tuple(Var(arg) if isinstance(arg, str) else Literal(arg) for arg in args))


def geometry_library() -> Program:
    """Build a program fragment holding the ``geometry`` module.

    The module imports ``add``, ``multiply`` and ``power`` from ``math``, so
    it must be merged with :func:`math_library` to link and run.
    """
    functions = [
        function(
            "rectangle_area",
            "int",
            [("width", "int"), ("height", "int")],
            [Return(_call("multiply", "width", "height"))],
        ),
        function(
            "rectangle_perimeter",
            "int",
            [("width", "int"), ("height", "int")],
            [
                Assign("width_times_two", _call("multiply", "width", 2)),
                Assign("height_times_two", _call("multiply", "height", 2)),
                Return(_call("add", "width_times_two", "height_times_two")),
            ],
        ),
        function(
            "circle_area_approx",
            "int",
            [("radius", "int")],
            [
                Assign("radius_squared", _call("power", "radius", 2)),
                Return(_call("multiply", 3, "radius_squared")),
            ],
        ),
        function(
            "cube_volume",
            "int",
            [("side", "int")],
            [
                Assign("area", _call("rectangle_area", "side", "side")),
                Return(_call("multiply", "area", "side")),
            ],
        ),
    ]
    return add_module(
        new(),
        MODULE_NAME,
        exports=[func.name for func in functions],
        imports={MATH: ["add", "multiply", "power"]},
        functions=functions,
    )
