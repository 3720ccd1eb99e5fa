"""
settings.py

Persistent settings management for FigSync.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/figsync/settings.toml
    - macOS: ~/Library/Application Support/figsync/settings.toml
    - Linux: ~/.config/figsync/settings.toml

The FIGSYNC_SETTINGS_DIR environment variable overrides the directory.
The Figma access token is never stored here.

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from debug_trace import trace
from models import DEFAULT_FILL, DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, SCALE_FACTOR

APP_NAME = "figsync"
SETTINGS_DIR_ENV = "FIGSYNC_SETTINGS_DIR"

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


def reset_settings() -> None:
    """Drop the singleton so the next ``get_settings()`` reloads from disk."""
    global _settings_manager
    _settings_manager = None


# =============================================================================
# Figma Settings
# =============================================================================

@dataclass
class FigmaApiSettings:
    """Figma REST API settings.

    Defaults:
        api_base_url: "https://api.figma.com"
        timeout_s: 30.0
    """
    api_base_url: str = "https://api.figma.com"  # Default: public Figma API
    timeout_s: float = 30.0                      # Default: 30 seconds


@dataclass
class FigmaImportSettings:
    """Node tree ingestion settings.

    Defaults:
        max_depth: 256
    """
    max_depth: int = 256  # Default: 256 levels of nesting


# =============================================================================
# Render Settings
# =============================================================================

@dataclass
class RenderSettings:
    """Settings for materializing nodes on the canvas.

    Defaults:
        scale_factor: 0.5
        default_fill: "#5256e3"
        default_font_size: 16
        default_font_family: "Arial"
    """
    scale_factor: float = SCALE_FACTOR     # Default: 0.5 (half size)
    default_fill: str = DEFAULT_FILL       # Default: "#5256e3" (indigo)
    default_font_size: float = DEFAULT_FONT_SIZE  # Default: 16 points
    default_font_family: str = DEFAULT_FONT_FAMILY  # Default: "Arial"


# =============================================================================
# Canvas Settings
# =============================================================================

@dataclass
class CanvasZOrderSettings:
    """Z-order layering settings.

    Defaults:
        base: 1000
        step: 10
    """
    base: int = 1000  # Default: 1000
    step: int = 10    # Default: 10


@dataclass
class CanvasZoomSettings:
    """Zoom behavior settings.

    Defaults:
        wheel_factor: 1.15
    """
    wheel_factor: float = 1.15  # Default: 1.15 (15% per scroll step)


@dataclass
class CanvasSettings:
    """All canvas-related settings."""
    zorder: CanvasZOrderSettings = field(default_factory=CanvasZOrderSettings)
    zoom: CanvasZoomSettings = field(default_factory=CanvasZoomSettings)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        theme: The UI theme name (must match a key in styles.STYLES).
        last_file_key: Figma file key or URL entered in the previous session.
        figma: Figma REST API settings.
        figma_import: Node tree ingestion settings.
        render: Canvas materialization settings.
        canvas: Canvas-related settings.
    """
    # UI Settings
    theme: str = "Light"  # Default: "Light"

    # Last file key entered in the fetch form (empty = none)
    last_file_key: str = ""

    # Nested settings categories
    figma: FigmaApiSettings = field(default_factory=FigmaApiSettings)
    figma_import: FigmaImportSettings = field(default_factory=FigmaImportSettings)
    render: RenderSettings = field(default_factory=RenderSettings)
    canvas: CanvasSettings = field(default_factory=CanvasSettings)


# =============================================================================
# Settings Manager
# =============================================================================

def _default_settings_dir(app_name: str) -> Path:
    override = os.environ.get(SETTINGS_DIR_ENV, "").strip()
    if override:
        return Path(override)
    return Path(platformdirs.user_config_dir(app_name))


class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Explicit directory, overriding platformdirs and
            the FIGSYNC_SETTINGS_DIR environment variable.
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        self.settings_dir = Path(settings_dir) if settings_dir else _default_settings_dir(app_name)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except (OSError, tomllib.TOMLDecodeError, AttributeError, TypeError, ValueError) as e:
            # If file is corrupted or invalid, return defaults
            trace(f"Settings file unreadable, using defaults: {e}", "SETTINGS")
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # General section
        general = data.get("general", {})
        settings.theme = general.get("theme", settings.theme)
        settings.last_file_key = general.get("last_file_key", settings.last_file_key)

        # Figma section
        figma = data.get("figma", {})
        if "api" in figma:
            api = figma["api"]
            settings.figma.api_base_url = api.get("api_base_url", settings.figma.api_base_url)
            settings.figma.timeout_s = float(api.get("timeout_s", settings.figma.timeout_s))
        if "import" in figma:
            imp = figma["import"]
            settings.figma_import.max_depth = int(imp.get("max_depth", settings.figma_import.max_depth))

        # Render section
        render = data.get("render", {})
        settings.render.scale_factor = float(render.get("scale_factor", settings.render.scale_factor))
        settings.render.default_fill = render.get("default_fill", settings.render.default_fill)
        settings.render.default_font_size = float(render.get("default_font_size", settings.render.default_font_size))
        settings.render.default_font_family = render.get("default_font_family", settings.render.default_font_family)

        # Canvas section
        canvas = data.get("canvas", {})
        if "zorder" in canvas:
            z = canvas["zorder"]
            settings.canvas.zorder.base = z.get("base", settings.canvas.zorder.base)
            settings.canvas.zorder.step = z.get("step", settings.canvas.zorder.step)
        if "zoom" in canvas:
            zm = canvas["zoom"]
            settings.canvas.zoom.wheel_factor = zm.get("wheel_factor", settings.canvas.zoom.wheel_factor)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "theme": s.theme,
                "last_file_key": s.last_file_key,
            },
            "figma": {
                "api": {
                    "api_base_url": s.figma.api_base_url,
                    "timeout_s": s.figma.timeout_s,
                },
                "import": {
                    "max_depth": s.figma_import.max_depth,
                },
            },
            "render": {
                "scale_factor": s.render.scale_factor,
                "default_fill": s.render.default_fill,
                "default_font_size": s.render.default_font_size,
                "default_font_family": s.render.default_font_family,
            },
            "canvas": {
                "zorder": {
                    "base": s.canvas.zorder.base,
                    "step": s.canvas.zorder.step,
                },
                "zoom": {
                    "wheel_factor": s.canvas.zoom.wheel_factor,
                },
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
