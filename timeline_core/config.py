"""
Configuration objects for publishing timelines.

Exposes the switches that change the generated declaration code without
editing the templates or the reduction logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class RenderConfig:
    """
    Configuration for `Renderer` output and timeline compilation.
    """

    # Short opcode names in generated code ("ac" instead of "addChild")
    compress: bool = False

    # Declared name of the root timeline; overrides the document name when set
    stage_name: Optional[str] = None

    # Refuse to build a timeline whose validation reports errors
    strict_validation: bool = False

    @classmethod
    def from_settings(cls, settings: Dict[str, Any] | None) -> "RenderConfig":
        """Create a RenderConfig from a document's ``publish`` section."""
        settings = settings or {}
        return cls(
            compress=bool(settings.get("compress", False)),
            stage_name=settings.get("stage_name"),
            strict_validation=bool(settings.get("strict_validation", False)),
        )
