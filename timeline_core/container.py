"""
Timeline container: reduces a frame sequence into a scene-graph declaration.

A container walks every command of every frame once, at construction time,
and keeps three pieces of state the target runtime never has to recompute:

- instances_map: one instance per distinct instance id, created lazily
- masks: mask intervals collected from the instances' mask events
- children: the content instances to declare, back-most first

Rendering happens in two phases plus a trailer:
1. Masks: every interval's mask instance is declared
2. Content: every child is declared, with its mask when it is a masked target
3. Static additions: one ``addChild`` statement listing every declared name
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import TYPE_CHECKING, Dict, Hashable, Iterable, List, Optional

from .enums import InstanceEvent
from .instance import Instance, SoundInstance
from .model import Command, Frame, MaskInterval
from .renderable import Renderable

if TYPE_CHECKING:
    from .library import Library

logger = logging.getLogger(__name__)


class Container(Renderable):
    """
    The reconstructed child tree of one timeline.

    Attributes:
        name: Declared name of the container
        library: Library used to create instances
        frames: Frame sequence the container was built from
        instances_map: Instance id -> Instance, one per distinct id
        masks: Mask intervals in the order their MASK commands were seen
        children: Content instances to declare (no masks, no sounds)
        add_children: Local names declared during the latest render pass
    """

    def __init__(self, library: "Library", frames: Iterable[Frame], name: str = "Stage"):
        """
        Build the container from a timeline.

        Args:
            library: Provides `create_instance(asset_id, instance_id)`
            frames: Ordered frame sequence; not modified

        Raises:
            AssetNotFoundError: If a command references an unknown asset
        """
        super().__init__({"name": name})
        self.library = library
        self.frames: List[Frame] = list(frames)
        self.instances_map: Dict[Hashable, Instance] = {}
        self.masks: List[MaskInterval] = []
        self.add_children: List[str] = []
        self.children: List[Instance] = self.get_children()

    # ----- timeline reduction -----
    def get_children(self) -> List[Instance]:
        """
        Walk the timeline and return the content instances to declare.

        Every command reaches its instance, including commands for sounds and
        masks. Each non-sound instance becomes a candidate the first time it
        is seen. Candidates that are not renderable once the whole timeline
        has been walked are dropped, and the survivors are reversed so the
        back-most instance is declared first.

        Returns:
            Ordered list of renderable content instances
        """
        candidates: List[Instance] = []
        seen = set()

        for frame in sorted(self.frames, key=attrgetter("frame")):
            for command in frame.commands:
                instance = self.instances_map.get(command.instance_id)

                if instance is None:
                    instance = self.library.create_instance(command.asset_id, command.instance_id)
                    self.instances_map[command.instance_id] = instance
                    instance.on(InstanceEvent.MASK_ADDED, self.on_mask_added)
                    instance.on(InstanceEvent.MASK_REMOVED, self.on_mask_removed)
                    logger.debug("%s: created %r at frame %d", self.name, instance, frame.frame)

                instance.add_to_frame(frame.frame, command)

                if not isinstance(instance, SoundInstance) and command.instance_id not in seen:
                    seen.add(command.instance_id)
                    candidates.append(instance)

        self.resolve_mask_targets()

        # Renderability depends on the full command history (e.g. masks)
        children = [instance for instance in candidates if instance.renderable]

        # TODO: replace reversal with a depth sort once commands carry depth
        children.reverse()
        return children

    # ----- mask events -----
    def on_mask_added(self, command: Command, frame: int) -> None:
        """
        Open a mask interval for the mask command's target.

        Args:
            command: MASK command; `instance_id` is the mask, `mask_instance_id` the target
            frame: Frame index the mask starts on
        """
        mask = self.instances_map.get(command.instance_id)
        instance = self.instances_map.get(command.mask_instance_id)
        logger.debug("%s: %s masks %s from frame %d", self.name, mask.local_name, command.mask_instance_id, frame)
        self.masks.append(MaskInterval(
            instance=instance,
            mask=mask,
            frame=frame,
            target_id=command.mask_instance_id,
        ))

    def resolve_mask_targets(self) -> None:
        """
        Bind intervals whose target appeared after the mask command.

        Intervals whose target never appears anywhere on the timeline are
        dropped with a warning, so every kept interval references an
        instance in `instances_map`.
        """
        resolved = []
        for interval in self.masks:
            if interval.instance is None:
                interval.instance = self.instances_map.get(interval.target_id)
            if interval.instance is None:
                logger.warning(
                    "%s: mask %s targets unknown instance %s at frame %d; ignored",
                    self.name, interval.mask.id, interval.target_id, interval.frame,
                )
                continue
            resolved.append(interval)
        self.masks = resolved

    def on_mask_removed(self, command: Command, frame: int) -> None:
        """
        Close every interval recorded for the removed mask.

        All intervals of the mask receive ``frame - interval.frame`` as their
        duration, not only the latest one. A mask with no intervals is ignored.
        """
        mask = self.instances_map.get(command.instance_id)
        for interval in self.masks:
            if interval.mask is mask:
                interval.duration = frame - interval.frame

    # ----- rendering -----
    def render(self, renderer) -> str:
        """
        Render the container declaration.

        Args:
            renderer: Provides `template(name, data)` and `compress`

        Returns:
            The container template wrapped around `get_contents`
        """
        return renderer.template("container", {
            "id": self.name,
            "contents": self.get_contents(renderer),
        })

    def get_contents(self, renderer) -> str:
        """Masks, then content children, then the static addition statement."""
        self.add_children = []
        logger.debug("%s: rendering %d masks and %d children", self.name, len(self.masks), len(self.children))
        pre_buffer = self.render_children_masks(renderer)
        buffer = self.render_children(renderer)
        post_buffer = self.render_add_children(renderer)
        return pre_buffer + buffer + post_buffer

    def render_children_masks(self, renderer) -> str:
        return "".join(self.render_instance(renderer, interval.mask) for interval in self.masks)

    def render_children(self, renderer) -> str:
        return "".join(self.render_instance(renderer, instance) for instance in self.children)

    def render_add_children(self, renderer) -> str:
        if not self.add_children:
            return ""
        func = "ac" if renderer.compress else "addChild"
        return f"this.{func}({', '.join(self.add_children)});"

    def render_instance(self, renderer, instance: Instance) -> str:
        """Declare `instance`, passing its mask when it is a masked target."""
        self.add_children.append(instance.local_name)
        return instance.render(renderer, self.get_mask_by_instance(instance))

    def get_mask_by_instance(self, instance: Instance) -> Optional[str]:
        """
        Find the mask applied to `instance`.

        Only the first interval targeting `instance` is used; later intervals
        for the same target are kept for bookkeeping but never rendered.

        Returns:
            Local name of the first mask targeting `instance`, or None
        """
        for interval in self.masks:
            if interval.instance is instance:
                return interval.mask.local_name
        return None
