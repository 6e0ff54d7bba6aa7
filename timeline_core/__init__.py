"""
Timeline Core Package.

This package reduces frame-based animation timelines into scene-graph
declaration code, including:

- Timeline data model (Frame, Command, MaskInterval)
- Instances and the asset library that creates them
- The Container that deduplicates instances, resolves mask intervals and
  orders the declared children
- Static renderables (Shape) and the template Renderer
- YAML compilation, validation, metrics and graph export

The generated code is meant for a scene-graph runtime that only has to
execute the declarations, not reason about the timeline.
"""

__version__ = "0.1.0"

from .enums import AssetType, CommandType, InstanceEvent
from .model import Command, Frame, MaskInterval
from .exceptions import (
    AssetNotFoundError,
    TemplateNotFoundError,
    TimelineError,
    TimelineValidationError,
)
from .config import RenderConfig
from .renderable import Renderable
from .renderer import Renderer
from .shape import Shape
from .instance import Instance, SoundInstance
from .container import Container
from .library import Asset, Library
from .compiler import Publication, compile_from_dict, compile_from_file, compile_from_yaml
from .metrics import (
    container_summary,
    instance_counts_by_kind,
    mask_timeline,
    open_masks,
    sound_cues,
)
