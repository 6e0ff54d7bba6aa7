"""
Asset library: resolves asset references and creates instances.

The library is the only place instances are constructed. Containers ask it
for a new instance the first time they meet an instance id and own the
result from then on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Optional

from .container import Container
from .enums import AssetType
from .exceptions import AssetNotFoundError, TimelineError
from .instance import Instance, SoundInstance
from .model import frames_from_list
from .shape import Shape

logger = logging.getLogger(__name__)


@dataclass
class Asset:
    """
    A reusable library item.

    Attributes:
        id: Asset id referenced by commands
        type: Kind of asset
        name: Optional declared class name
        data: Type-specific payload (``paths`` for shapes, ``frames`` for containers)
    """

    id: Hashable
    type: AssetType
    name: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def class_name(self) -> str:
        """Declared name, ``<TypeTitle><id>`` unless the asset is named.

        Shapes always use ``Shape<id>`` so instances match `Shape.name`.
        """
        if self.name and self.type != AssetType.SHAPE:
            return self.name
        return f"{self.type.name.title()}{self.id}"

    @classmethod
    def from_dict(cls, entry: Dict[str, Any]) -> "Asset":
        if entry.get("id") is None:
            raise TimelineError(f"Asset is missing 'id': {entry!r}")
        try:
            kind = AssetType.from_name(entry.get("type", ""))
        except KeyError:
            raise TimelineError(f"Unknown asset type {entry.get('type')!r}") from None
        data = {k: v for k, v in entry.items() if k not in ("id", "type", "name")}
        return cls(id=entry["id"], type=kind, name=entry.get("name"), data=data)


class Library:
    """
    Collection of assets keyed by id.

    Attributes:
        assets: Asset id -> Asset, in registration order
    """

    def __init__(self, assets: Iterable[Asset] = ()):
        self.assets: Dict[Hashable, Asset] = {}
        self._shapes: Optional[List[Shape]] = None
        self._containers: Optional[List[Container]] = None
        for asset in assets:
            self.add_asset(asset)

    def add_asset(self, asset: Asset) -> None:
        self.assets[asset.id] = asset
        self._shapes = None
        self._containers = None

    def get_asset(self, asset_id: Hashable) -> Asset:
        """
        Look up an asset.

        Raises:
            AssetNotFoundError: If `asset_id` is not registered
        """
        try:
            return self.assets[asset_id]
        except KeyError:
            raise AssetNotFoundError(asset_id) from None

    def create_instance(self, asset_id: Hashable, instance_id: Hashable) -> Instance:
        """
        Create a new instance of an asset.

        Args:
            asset_id: Asset to instantiate
            instance_id: Identity of the new timeline instance

        Returns:
            A `SoundInstance` for sound assets, an `Instance` otherwise

        Raises:
            AssetNotFoundError: If `asset_id` is not registered
        """
        asset = self.get_asset(asset_id)
        if asset.type == AssetType.SOUND:
            return SoundInstance(asset, instance_id)
        return Instance(asset, instance_id)

    @property
    def shapes(self) -> List[Shape]:
        """A compiled `Shape` per shape asset, in asset order."""
        if self._shapes is None:
            self._shapes = [
                Shape({"id": asset.id, "paths": asset.data.get("paths", [])})
                for asset in self.assets.values()
                if asset.type == AssetType.SHAPE
            ]
        return self._shapes

    @property
    def containers(self) -> List[Container]:
        """A `Container` per nested timeline asset, in asset order."""
        if self._containers is None:
            containers = []
            for asset in self.assets.values():
                if asset.type != AssetType.CONTAINER:
                    continue
                logger.debug("Building nested timeline %s", asset.class_name)
                frames = frames_from_list(asset.data.get("frames", []))
                containers.append(Container(self, frames, name=asset.class_name))
            self._containers = containers
        return self._containers

    def shapes_payload(self) -> Dict[str, List[Any]]:
        """Draw commands of every shape keyed by shape name."""
        return {shape.name: list(shape.draw) for shape in self.shapes}
