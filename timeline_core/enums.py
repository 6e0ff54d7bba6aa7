"""
Core enumerations for the timeline publisher.

This module defines the command, asset, and event vocabulary shared by the
timeline model, the instances built from it, and the containers that reduce a
timeline into a scene-graph declaration.
"""

from enum import Enum, auto


class CommandType(Enum):
    """
    Kinds of per-frame authoring commands.

    Commands are what the authoring tool records for each frame:
    - PLACE: An instance appears on (or is updated in) the timeline
    - MOVE: An instance changes its transform
    - MASK: An instance starts clipping another instance
    - REMOVE: An instance leaves the timeline
    """

    PLACE = auto()
    """Instance is placed on the timeline."""

    MOVE = auto()
    """Instance transform changes; no structural meaning for the tree."""

    MASK = auto()
    """Instance starts masking the instance named by the command's mask target."""

    REMOVE = auto()
    """Instance is removed from the timeline."""

    @classmethod
    def from_name(cls, name: str) -> "CommandType":
        """Resolve a lowercase document name such as ``"mask"``."""
        return cls[str(name).upper()]


class AssetType(Enum):
    """
    Types of reusable library assets an instance can reference.

    - SHAPE: Vector path data compiled into draw opcodes
    - BITMAP: Raster image
    - SOUND: Audio clip; never part of the rendered tree
    - CONTAINER: Nested timeline with its own frames
    """

    SHAPE = auto()
    """Vector graphic compiled into a `Shape`."""

    BITMAP = auto()
    """Raster image asset."""

    SOUND = auto()
    """Audio asset, instantiated as a `SoundInstance`."""

    CONTAINER = auto()
    """Nested timeline, published as its own container declaration."""

    @classmethod
    def from_name(cls, name: str) -> "AssetType":
        """Resolve a lowercase document name such as ``"bitmap"``."""
        return cls[str(name).upper()]


class InstanceEvent(Enum):
    """
    Events an instance emits to its owning container.

    - MASK_ADDED: The instance started masking another instance
    - MASK_REMOVED: The instance stopped masking
    """

    MASK_ADDED = auto()
    """Fired with (command, frame) when a MASK command reaches the instance."""

    MASK_REMOVED = auto()
    """Fired with (command, frame) when a masking instance is removed."""
