"""
Base capability for anything that renders into declaration code.
"""

from __future__ import annotations

from typing import Any, Dict


class Renderable:
    """
    An object built from a data bag that renders itself to a text fragment.

    Every key of `data` becomes an attribute. Subclasses must override
    `render`; calling the base implementation is a programming error.
    """

    def __init__(self, data: Dict[str, Any] | None = None):
        for key, value in (data or {}).items():
            setattr(self, key, value)

    def render(self, renderer) -> str:
        """Render the object as a string."""
        raise NotImplementedError(f"{type(self).__name__} must override render()")
