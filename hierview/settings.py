"""
Hierarchy view settings.

Stores row layout hints and thumbnail cache limits.
Settings are saved to hierview_settings.json next to the project.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hierview import log
from hierview.errors import SettingsError

SETTINGS_FILE_NAME = "hierview_settings.json"


@dataclass
class HierarchySettings:
    """
    View settings of the hierarchy panel.

    Attributes:
        indent_per_depth: Horizontal indent per tree level, in pixels.
        row_height_scale: Row height relative to body text size.
        thumbnail_max_size: Bounding box for scaled-down images.
        thumbnail_collapse_threshold: Source images this large or larger
            are shown collapsed by default.
        expand_roots_by_default: Expand roots the first time they appear.
    """

    indent_per_depth: float = 15.0
    row_height_scale: float = 1.5
    thumbnail_max_size: tuple[int, int] = (100, 100)
    thumbnail_collapse_threshold: int = 128
    expand_roots_by_default: bool = False

    def to_dict(self) -> dict:
        return {
            "indent_per_depth": self.indent_per_depth,
            "row_height_scale": self.row_height_scale,
            "thumbnail_max_size": list(self.thumbnail_max_size),
            "thumbnail_collapse_threshold": self.thumbnail_collapse_threshold,
            "expand_roots_by_default": self.expand_roots_by_default,
        }

    @staticmethod
    def from_dict(data: dict) -> "HierarchySettings":
        """Deserialize, filling missing keys with defaults."""
        defaults = HierarchySettings()
        try:
            indent = float(data.get("indent_per_depth", defaults.indent_per_depth))
            scale = float(data.get("row_height_scale", defaults.row_height_scale))
            width, height = data.get("thumbnail_max_size", defaults.thumbnail_max_size)
            threshold = int(data.get("thumbnail_collapse_threshold", defaults.thumbnail_collapse_threshold))
            expand_roots = data.get("expand_roots_by_default", defaults.expand_roots_by_default)
            max_size = (int(width), int(height))
        except (TypeError, ValueError) as e:
            raise SettingsError(f"Malformed hierarchy settings: {e}") from e

        if not isinstance(expand_roots, bool):
            raise SettingsError(f"expand_roots_by_default must be true or false, got {expand_roots!r}")
        if indent < 0:
            raise SettingsError(f"indent_per_depth must be >= 0, got {indent}")
        if scale <= 0:
            raise SettingsError(f"row_height_scale must be > 0, got {scale}")
        if max_size[0] <= 0 or max_size[1] <= 0:
            raise SettingsError(f"thumbnail_max_size must be positive, got {max_size}")

        return HierarchySettings(
            indent_per_depth=indent,
            row_height_scale=scale,
            thumbnail_max_size=max_size,
            thumbnail_collapse_threshold=threshold,
            expand_roots_by_default=expand_roots,
        )


class HierarchySettingsManager:
    """
    Singleton manager for hierarchy settings.

    Handles loading/saving settings from a project directory.
    """

    _instance: Optional["HierarchySettingsManager"] = None

    def __init__(self) -> None:
        self._settings = HierarchySettings()
        self._project_path: Optional[Path] = None

    @classmethod
    def instance(cls) -> "HierarchySettingsManager":
        if cls._instance is None:
            cls._instance = HierarchySettingsManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    @property
    def settings(self) -> HierarchySettings:
        return self._settings

    @property
    def project_path(self) -> Optional[Path]:
        return self._project_path

    def set_project_path(self, path: Path | str) -> None:
        """Set project path and load settings."""
        self._project_path = Path(path)
        self.load()

    def _get_settings_path(self) -> Optional[Path]:
        if self._project_path is None:
            return None
        return self._project_path / SETTINGS_FILE_NAME

    def load(self) -> HierarchySettings:
        """Load settings from file, falling back to defaults on any problem."""
        path = self._get_settings_path()
        if path is None or not path.exists():
            self._settings = HierarchySettings()
            return self._settings

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = HierarchySettings.from_dict(data)
            log.info(f"[HierarchySettings] Loaded from {path}")
        except (OSError, json.JSONDecodeError, SettingsError, AttributeError) as e:
            log.error(f"[HierarchySettings] Failed to load settings: {e}")
            self._settings = HierarchySettings()
        return self._settings

    def save(self) -> bool:
        """Save settings to file."""
        path = self._get_settings_path()
        if path is None:
            log.error("[HierarchySettings] No project path set, cannot save")
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            log.info(f"[HierarchySettings] Saved to {path}")
            return True
        except OSError as e:
            log.error(f"[HierarchySettings] Failed to save settings: {e}")
            return False

    def update(self, settings: HierarchySettings) -> None:
        self._settings = settings
