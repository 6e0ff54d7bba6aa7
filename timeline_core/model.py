"""
Timeline data model: frames, commands, and mask intervals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterable, List, Optional, Tuple

from .enums import CommandType
from .exceptions import TimelineError

if TYPE_CHECKING:
    from .instance import Instance


@dataclass(frozen=True)
class Command:
    """
    One authoring directive inside a frame.

    Attributes:
        instance_id: Stable identity of the timeline instance across frames
        asset_id: Library asset the instance is built from
        type: What the command does (place, move, mask, remove)
        mask_instance_id: For MASK commands, the instance being masked
    """

    instance_id: Hashable
    asset_id: Hashable
    type: CommandType = CommandType.PLACE
    mask_instance_id: Optional[Hashable] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Command":
        if data.get("instance_id") is None:
            raise TimelineError(f"Command is missing 'instance_id': {data!r}")
        try:
            kind = CommandType.from_name(data.get("type", "place"))
        except KeyError:
            raise TimelineError(f"Unknown command type {data.get('type')!r}") from None
        return cls(
            instance_id=data["instance_id"],
            asset_id=data.get("asset_id"),
            type=kind,
            mask_instance_id=data.get("mask_instance_id"),
        )


@dataclass(frozen=True)
class Frame:
    frame: int
    commands: Tuple[Command, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Frame":
        if not isinstance(data.get("frame"), int):
            raise TimelineError(f"Frame index must be an integer: {data!r}")
        commands = tuple(Command.from_dict(c) for c in data.get("commands", []) or [])
        return cls(frame=data["frame"], commands=commands)


def frames_from_list(entries: Iterable[Dict[str, Any]]) -> List[Frame]:
    """Load an ordered frame sequence from parsed document entries."""
    return [Frame.from_dict(entry) for entry in entries or []]


@dataclass
class MaskInterval:
    """
    A span of frames during which `mask` clips `instance`.

    `duration` stays None until the mask is removed; an open interval lasts
    to the end of the timeline. `instance` is None while the target has not
    been seen yet; `target_id` names it until the container resolves it.
    """

    instance: Optional["Instance"]
    mask: "Instance"
    frame: int
    duration: Optional[int] = None
    target_id: Optional[Hashable] = field(default=None, compare=False, repr=False)

    @property
    def end(self) -> Optional[int]:
        """Frame at which the mask was removed, or None while open."""
        if self.duration is None:
            return None
        return self.frame + self.duration
