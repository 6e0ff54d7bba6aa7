"""
Template renderer handed to every renderable during a publish pass.
"""

from __future__ import annotations

from typing import Any, Dict

from .config import RenderConfig
from .exceptions import TemplateNotFoundError
from .templates import TEMPLATES


class Renderer:
    """
    Maps a template name and its data to a text fragment.

    Attributes:
        config: Output switches (compress mode, stage name)
        templates: Template table, defaults merged with any overrides
    """

    def __init__(self, config: RenderConfig | None = None, templates: Dict[str, str] | None = None):
        self.config = config or RenderConfig()
        self.templates: Dict[str, str] = dict(TEMPLATES)
        if templates:
            self.templates.update(templates)

    @property
    def compress(self) -> bool:
        """Whether short opcode names are emitted."""
        return self.config.compress

    def template(self, name: str, data: Any) -> str:
        """
        Render template `name` with `data`.

        Args:
            name: Template key
            data: Dict of keyword fields, or a single value for field ``{0}``

        Returns:
            The formatted fragment

        Raises:
            TemplateNotFoundError: If no template is registered under `name`
        """
        try:
            tpl = self.templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None
        if isinstance(data, dict):
            return tpl.format(**data)
        return tpl.format(data)
