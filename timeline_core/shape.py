"""
Vector shapes compiled into flat draw-opcode sequences.

A shape is built once from its path data:

paths:
  - stroke: true
    color: "#000000"
    thickness: 2
    alpha: 1
    d: [m, 0, 0, l, 10.256, 0]
  - color: "#ff0000"      # no stroke -> fill
    alpha: 0.5
    d: [m, 0, 0, l, 5, 5]

compiles to

  s "#000000" 2 1 m 0 0 l 10.26 0 cp f "#ff0000" 0.5 m 0 0 l 5 5

Notes:
- ``cp`` (close path) separates successive paths; it never leads.
- Floats inside ``d`` are rounded to two decimals; sub-opcodes and integers
  pass through unchanged.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from .renderable import Renderable

CLOSE_PATH = "cp"
STROKE = "s"
FILL = "f"


def round_coordinate(value: float) -> float:
    """Round to two decimals, halves away from zero on the scaled value."""
    scaled = math.floor(abs(value) * 100 + 0.5) / 100
    return math.copysign(scaled, value)


def _compile_values(d: List[Any]) -> List[Any]:
    compiled = []
    for value in d:
        if isinstance(value, float):
            value = round_coordinate(value)
        compiled.append(value)
    return compiled


class Shape(Renderable):
    """
    A static renderable holding compiled draw commands.

    Attributes:
        id: Asset id of the shape
        paths: Source path data (left untouched)
        name: Declared name, ``Shape<id>``
        draw: Tuple of draw opcodes and values
    """

    def __init__(self, data: Dict[str, Any]):
        super().__init__(data)
        self.name = f"Shape{self.id}"

        draw: List[Any] = []
        for j, path in enumerate(self.paths):
            if j > 0:
                draw.append(CLOSE_PATH)

            if path.get("stroke"):
                draw.extend([STROKE, path.get("color"), path.get("thickness"), path.get("alpha")])
            else:
                draw.extend([FILL, path.get("color"), path.get("alpha")])

            draw.extend(_compile_values(path.get("d", [])))

        self.draw = tuple(draw)

    def render(self, renderer) -> str:
        return renderer.template("shape", self.name)
