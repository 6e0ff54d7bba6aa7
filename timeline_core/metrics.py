"""
Statistics over a built timeline container.

This module provides read-only helpers for inspecting what a `Container`
reduced its timeline to:
- Instance counts by asset type
- Mask intervals with resolved start, duration and end frames
- Sound cue frames (sounds are never declared, only timed)
- A combined summary used by the command-line `--stats` output
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from .container import Container
from .instance import SoundInstance
from .model import MaskInterval


def instance_counts_by_kind(container: Container) -> Dict[str, int]:
    """Return asset type name -> number of instances of that type."""
    counts: Dict[str, int] = {}
    for instance in container.instances_map.values():
        kind = instance.asset.type.name
        counts[kind] = counts.get(kind, 0) + 1
    return counts


def mask_timeline(container: Container) -> List[Dict[str, Any]]:
    """Return one record per mask interval, in the order masks were added."""
    return [
        {
            "mask": interval.mask.local_name,
            "target": interval.instance.local_name,
            "start": interval.frame,
            "duration": interval.duration,
            "end": interval.end,
        }
        for interval in container.masks
    ]


def open_masks(container: Container) -> List[MaskInterval]:
    """Return the intervals that were never closed by a removal."""
    return [interval for interval in container.masks if interval.duration is None]


def sound_cues(container: Container) -> List[Tuple[str, int]]:
    """Return (local_name, frame) for every command on a sound instance."""
    cues = []
    for instance in container.instances_map.values():
        if not isinstance(instance, SoundInstance):
            continue
        for frame in sorted(instance.frames):
            for _ in instance.frames[frame]:
                cues.append((instance.local_name, frame))
    return sorted(cues, key=lambda cue: cue[1])


def container_summary(container: Container) -> Dict[str, Any]:
    """Return counts describing the reduced timeline."""
    frames = [frame.frame for frame in container.frames]
    sounds = [i for i in container.instances_map.values() if isinstance(i, SoundInstance)]
    return {
        "name": container.name,
        "frames": len(frames),
        "last_frame": max(frames) if frames else None,
        "instances": len(container.instances_map),
        "children": len(container.children),
        "masks": len(container.masks),
        "open_masks": len(open_masks(container)),
        "sounds": len(sounds),
        "instances_by_kind": instance_counts_by_kind(container),
    }
