"""Standard module library for cix.

Prebuilt program fragments, each holding one module, meant to be combined
with user code through :func:`create_program`:

- math_library: add, subtract, multiply, divide, power
- io_library: print_int, print_two_ints, print_calculation_result
- geometry_library: rectangle_area, rectangle_perimeter, circle_area_approx,
  cube_volume (imports math)
"""

from collections.abc import Iterable

from cix._ir import Program, merge

from ._geometry import geometry_library
from ._io import io_library
from ._math import math_library


def create_program(fragments: Iterable[Program]) -> Program:
    """Merge library fragments and user programs into one Program.

    Example:
        >>> program = create_program([math_library(), geometry_library()])
        >>> [m.name for m in program.modules]
        ['math', 'geometry']

    """
    return merge(fragments)


__all__ = ["create_program", "geometry_library", "io_library", "math_library"]
