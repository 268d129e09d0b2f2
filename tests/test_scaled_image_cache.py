"""
Тесты для ScaledImageCache.
"""

import numpy as np
import pytest
from PIL import Image

from hierview.settings import HierarchySettings
from hierview.thumbnails import ScaledImageCache


class TestScaledImageCache:
    def test_scales_to_fit_preserving_aspect(self):
        images = {"wide": Image.new("RGBA", (400, 200), (255, 0, 0, 255))}
        cache = ScaledImageCache()

        info = cache.get_or_load("wide", images)

        assert info is not None
        assert info.size == (100, 50)
        assert info.image.size == (100, 50)
        assert info.source_size == (400, 200)

    def test_memoized(self):
        images = {"a": Image.new("RGB", (64, 64))}
        cache = ScaledImageCache()

        first = cache.get_or_load("a", images)
        images["a"] = Image.new("RGB", (8, 8))
        second = cache.get_or_load("a", images)

        assert second is first
        assert len(cache) == 1
        assert "a" in cache

    def test_invalidate_reloads(self):
        images = {"a": Image.new("RGB", (200, 200))}
        cache = ScaledImageCache()
        cache.get_or_load("a", images)

        cache.invalidate("a")
        cache.set_max_size((50, 50))
        assert cache.get_or_load("a", images).size == (50, 50)

    def test_missing_asset(self):
        cache = ScaledImageCache()
        assert cache.get_or_load("nope", {}) is None
        assert len(cache) == 0

    def test_numpy_rgba(self):
        data = np.zeros((20, 40, 4), dtype=np.uint8)
        data[..., 3] = 255
        cache = ScaledImageCache(max_size=(10, 10))

        info = cache.get_or_load(1, {1: data})
        assert info.size == (10, 5)
        assert info.image.mode == "RGBA"

    def test_numpy_float_grayscale(self):
        data = np.linspace(0.0, 1.0, 16, dtype=np.float32).reshape(4, 4)
        cache = ScaledImageCache(max_size=(8, 8))

        info = cache.get_or_load("g", {"g": data})
        assert info.size == (8, 8)
        assert info.image.mode == "L"

    @pytest.mark.parametrize(
        "data",
        [
            np.zeros((4, 4, 2), dtype=np.uint8),
            np.zeros((4, 4), dtype=np.int64),
            np.zeros((0, 4, 4), dtype=np.uint8),
            "not an image",
        ],
    )
    def test_unsupported_data_not_cached(self, data):
        cache = ScaledImageCache()
        assert cache.get_or_load("x", {"x": data}) is None
        assert "x" not in cache

    def test_should_collapse(self):
        images = {"big": Image.new("RGB", (512, 512)), "small": Image.new("RGB", (512, 512))}
        cache = ScaledImageCache(max_size=(256, 256))
        big = cache.get_or_load("big", images)
        assert cache.should_collapse(big)

        cache = ScaledImageCache()
        small = cache.get_or_load("small", images)
        assert not cache.should_collapse(small)

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            ScaledImageCache().set_max_size((0, 10))

    def test_clear(self):
        cache = ScaledImageCache()
        cache.get_or_load("a", {"a": Image.new("L", (3, 3))})
        cache.clear()
        assert len(cache) == 0

    def test_from_settings(self):
        settings = HierarchySettings(thumbnail_max_size=(300, 300), thumbnail_collapse_threshold=200)
        cache = ScaledImageCache.from_settings(settings)

        info = cache.get_or_load("a", {"a": Image.new("RGB", (600, 300))})
        assert info.size == (300, 150)
        assert cache.should_collapse(info)
        assert not cache.should_collapse(info, threshold=400)
