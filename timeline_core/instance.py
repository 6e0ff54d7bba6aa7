"""
Timeline instances: the cross-frame state of one placed asset.

An instance collects every command addressed to its instance id, in frame
order, and tells its owning container when it starts and stops masking
another instance. Containers subscribe to those events with `Instance.on`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Hashable, List, Optional

from .enums import CommandType, InstanceEvent
from .model import Command
from .renderable import Renderable

if TYPE_CHECKING:
    from .library import Asset

MaskHandler = Callable[[Command, int], None]


class Instance(Renderable):
    """
    A placed asset on a timeline.

    Attributes:
        asset: Library asset this instance was created from
        id: Instance id shared by all of its commands
        local_name: Identifier used in generated declaration code
        frames: Frame index -> commands received on that frame
        is_mask: True once the instance has masked another instance
    """

    def __init__(self, asset: "Asset", instance_id: Hashable):
        super().__init__()
        self.asset = asset
        self.id = instance_id
        self.local_name = f"instance{instance_id}"
        self.frames: Dict[int, List[Command]] = {}
        self.is_mask = False
        self._masking = False
        self._handlers: Dict[InstanceEvent, List[MaskHandler]] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.local_name!r}, asset={self.asset.id!r})"

    # ----- events -----
    def on(self, event: InstanceEvent, handler: MaskHandler) -> None:
        """Register `handler` to be called as handler(command, frame) on `event`."""
        self._handlers.setdefault(event, []).append(handler)

    def emit(self, event: InstanceEvent, command: Command, frame: int) -> None:
        for handler in self._handlers.get(event, []):
            handler(command, frame)

    # ----- timeline -----
    def add_to_frame(self, frame: int, command: Command) -> None:
        """
        Record `command` on `frame` and fire mask lifecycle events.

        A MASK command turns the instance into a mask and emits MASK_ADDED.
        A REMOVE command while masking emits MASK_REMOVED.
        """
        self.frames.setdefault(frame, []).append(command)

        if command.type == CommandType.MASK:
            self.is_mask = True
            self._masking = True
            self.emit(InstanceEvent.MASK_ADDED, command, frame)
        elif command.type == CommandType.REMOVE and self._masking:
            self._masking = False
            self.emit(InstanceEvent.MASK_REMOVED, command, frame)

    @property
    def commands(self) -> List[Command]:
        """Every recorded command, in frame order."""
        return [command for frame in sorted(self.frames) for command in self.frames[frame]]

    @property
    def first_frame(self) -> Optional[int]:
        return min(self.frames) if self.frames else None

    @property
    def renderable(self) -> bool:
        """Masks are declared through mask intervals, never as content."""
        return not self.is_mask

    def render(self, renderer, mask: Optional[str] = None) -> str:
        data = {
            "local_name": self.local_name,
            "class_name": self.asset.class_name,
            "mask": mask,
        }
        if mask is None:
            return renderer.template("instance", data)
        return renderer.template("masked_instance", data)


class SoundInstance(Instance):
    """A sound placed on a timeline; keeps its commands but is never drawn."""

    @property
    def renderable(self) -> bool:
        return False
