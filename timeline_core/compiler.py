"""
YAML timeline compiler.

This module compiles a timeline document into a `Publication`: the asset
`Library` plus the stage `Container` built from the document's root frames.

YAML schema (minimal):

name: Stage
publish:
  compress: false
assets:
  - id: 1
    type: shape
    paths:
      - {color: "#ff0000", alpha: 1, d: [m, 0, 0, l, 10, 0]}
  - id: 2
    type: sound
  - id: 3
    type: container      # nested timeline with its own frames
    frames:
      - frame: 0
        commands:
          - {instance_id: 1, asset_id: 1}
frames:
  - frame: 0
    commands:
      - {instance_id: 1, asset_id: 1}
      - {instance_id: 2, asset_id: 1, type: mask, mask_instance_id: 1}
  - frame: 3
    commands:
      - {instance_id: 2, asset_id: 1, type: remove}

Notes:
- Command ``type`` is one of place (default), move, mask, remove.
- Asset ids referenced by commands must exist; `AssetNotFoundError`
  propagates out of compilation otherwise.
- With ``strict_validation`` the frames are validated before any instance
  is built and `TimelineValidationError` is raised on errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from .config import RenderConfig
from .container import Container
from .exceptions import TimelineValidationError
from .library import Asset, Library
from .model import frames_from_list
from .renderer import Renderer
from .validation import get_validation_summary, validate_all

logger = logging.getLogger(__name__)

DEFAULT_STAGE_NAME = "Stage"


@dataclass
class Publication:
    """A compiled timeline document ready to render."""

    library: Library
    stage: Container
    config: RenderConfig = field(default_factory=RenderConfig)

    def render(self, renderer: Renderer | None = None) -> str:
        """Shape declarations, then nested containers, then the stage."""
        renderer = renderer or Renderer(self.config)
        buffer = "".join(shape.render(renderer) for shape in self.library.shapes)
        buffer += "".join(container.render(renderer) for container in self.library.containers)
        return buffer + self.stage.render(renderer)


def load_library(spec: Dict[str, Any]) -> Library:
    """Build the asset library from a document's ``assets`` list."""
    return Library(Asset.from_dict(entry) for entry in spec.get("assets", []) or [])


def compile_from_dict(spec: Dict[str, Any], config: RenderConfig | None = None) -> Publication:
    """
    Compile a parsed timeline document into a `Publication`.

    Args:
        spec: Parsed YAML dictionary
        config: Overrides the document's ``publish`` section when given; its
            ``stage_name``, when set, wins over the document's ``name``

    Returns:
        Publication: Library and stage container
    """
    config = config or RenderConfig.from_settings(spec.get("publish"))
    library = load_library(spec)
    frames = frames_from_list(spec.get("frames", []))

    if config.strict_validation:
        results = validate_all(frames, library)
        summary = get_validation_summary(results)
        if summary["errors"]:
            raise TimelineValidationError(results)

    name = config.stage_name or spec.get("name") or DEFAULT_STAGE_NAME
    logger.debug("Compiling %s: %d assets, %d frames", name, len(library.assets), len(frames))
    stage = Container(library, frames, name=name)
    return Publication(library=library, stage=stage, config=config)


def compile_from_yaml(yaml_text: str, config: RenderConfig | None = None) -> Publication:
    """Compile from YAML text into a `Publication`."""
    data = yaml.safe_load(yaml_text) or {}
    return compile_from_dict(data, config)


def compile_from_file(path: str, config: RenderConfig | None = None) -> Publication:
    """Compile from a YAML file path into a `Publication`."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return compile_from_yaml(txt, config)
