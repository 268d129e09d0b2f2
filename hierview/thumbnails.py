"""
ScaledImageCache — уменьшенные копии изображений для инспектора.

Images are scaled down on first request and memoized by asset id:

    cache = ScaledImageCache(max_size=(100, 100))
    info = cache.get_or_load("textures/grass.png", images)
    if info is not None:
        show(info.image, collapsed=cache.should_collapse(info))

`images` is any mapping from asset id to a PIL image or a numpy array
of shape (height, width[, channels]).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Hashable, Mapping

import numpy as np
from PIL import Image

from hierview import log

if TYPE_CHECKING:
    from hierview.settings import HierarchySettings

DEFAULT_MAX_SIZE = (100, 100)
DEFAULT_COLLAPSE_THRESHOLD = 128


@dataclass
class RescaledImageInfo:
    """
    Scaled-down image and where it came from.

    Attributes:
        asset_id: Id of the source image.
        image: Scaled copy (RGBA or L).
        size: (width, height) of the scaled copy.
        source_size: (width, height) of the source image.
    """

    asset_id: Hashable
    image: Image.Image
    size: tuple[int, int]
    source_size: tuple[int, int]


class ScaledImageCache:
    def __init__(
        self,
        max_size: tuple[int, int] = DEFAULT_MAX_SIZE,
        collapse_threshold: int = DEFAULT_COLLAPSE_THRESHOLD,
    ) -> None:
        self._textures: dict[Hashable, RescaledImageInfo] = {}
        self._max_size = max_size
        self.collapse_threshold = collapse_threshold

    @classmethod
    def from_settings(cls, settings: "HierarchySettings") -> "ScaledImageCache":
        return cls(
            max_size=settings.thumbnail_max_size,
            collapse_threshold=settings.thumbnail_collapse_threshold,
        )

    @property
    def max_size(self) -> tuple[int, int]:
        return self._max_size

    def set_max_size(self, new_size: tuple[int, int]) -> None:
        """
        Change the bounding box for new thumbnails.

        Already cached thumbnails keep their size until invalidated.
        """
        width, height = new_size
        if width <= 0 or height <= 0:
            raise ValueError(f"max_size must be positive, got {new_size}")
        self._max_size = (int(width), int(height))

    def get_or_load(
        self,
        asset_id: Hashable,
        images: Mapping[Hashable, Any],
    ) -> RescaledImageInfo | None:
        """
        Cached thumbnail for asset_id, creating it from images if needed.

        Returns None if the asset is missing or its data cannot be turned
        into an image. Failures are not memoized.
        """
        cached = self._textures.get(asset_id)
        if cached is not None:
            return cached

        original = images.get(asset_id)
        if original is None:
            return None

        source = _to_pil(original)
        if source is None:
            log.warn(f"[ScaledImageCache] Unsupported image data for {asset_id!r}: {type(original).__name__}")
            return None

        scaled = source.resize(
            _fit_size(source.size, self._max_size),
            Image.Resampling.BILINEAR,
        )
        info = RescaledImageInfo(
            asset_id=asset_id,
            image=scaled,
            size=scaled.size,
            source_size=source.size,
        )
        self._textures[asset_id] = info
        return info

    def should_collapse(self, info: RescaledImageInfo, threshold: int | None = None) -> bool:
        """Large thumbnails go under a collapsible header."""
        if threshold is None:
            threshold = self.collapse_threshold
        return max(info.size) >= threshold

    def invalidate(self, asset_id: Hashable) -> None:
        self._textures.pop(asset_id, None)

    def clear(self) -> None:
        self._textures.clear()

    def __len__(self) -> int:
        return len(self._textures)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._textures


def _fit_size(size: tuple[int, int], bounds: tuple[int, int]) -> tuple[int, int]:
    """Largest size inside bounds with the aspect ratio of size."""
    width, height = size
    max_width, max_height = bounds
    ratio = min(max_width / width, max_height / height)
    return (
        max(1, min(max_width, round(width * ratio))),
        max(1, min(max_height, round(height * ratio))),
    )


def _to_pil(data: Any) -> Image.Image | None:
    if isinstance(data, Image.Image):
        if data.width == 0 or data.height == 0:
            return None
        if data.mode in ("RGBA", "L"):
            return data
        return data.convert("RGBA")

    if not isinstance(data, np.ndarray):
        return None

    array = data
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    if array.ndim not in (2, 3) or array.shape[0] == 0 or array.shape[1] == 0:
        return None
    if array.ndim == 3 and array.shape[2] not in (3, 4):
        return None

    if np.issubdtype(array.dtype, np.floating):
        # Float data is linear [0, 1].
        array = (np.clip(array, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    elif array.dtype != np.uint8:
        return None

    image = Image.fromarray(np.ascontiguousarray(array))
    if image.mode == "RGB":
        image = image.convert("RGBA")
    return image
