"""
Configuration service for PixelPaint.

This module handles loading, saving, and managing application settings.
Configuration is stored as JSON in ~/.config/pixelpaint/config.json following
the XDG Base Directory Specification.
"""

import copy
import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pixelpaint.services.logging_service import get_logger

# Default configuration directory following XDG Base Directory Specification
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "pixelpaint"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

# "#rrggbb", leading # optional
HEX_COLOR_PATTERN = re.compile(r"^#?[0-9a-fA-F]{6}$")

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "theme": "dark",
    "log_level": "INFO",
    # Size of the blank surface created at startup
    "canvas": {
        "width": 500,
        "height": 300,
    },
    # Brush sizes offered by the toolbar, in pixels
    "brush_sizes": [1, 2, 3, 5, 8, 12, 25, 35, 50, 75, 100],
    "default_brush_width": 1,
    "default_color": "#000000",
    "default_tool": "Line",
    # Period of the spray can emission
    "spray_interval_ms": 25,
    "default_save_folder": str(Path.home() / "Pictures" / "PixelPaint"),
}


class ConfigService:
    """
    Service for managing application configuration.

    Handles loading, saving, and accessing configuration values.
    Provides sensible defaults when config file is missing or corrupted.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize the ConfigService.

        Args:
            config_path: Optional path to config file. Defaults to
                        ~/.config/pixelpaint/config.json
        """
        self._logger = get_logger(__name__)
        self._config_path = config_path or DEFAULT_CONFIG_FILE
        self._config: Dict[str, Any] = {}

        self._load()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load(self) -> None:
        """Load configuration from file, using defaults if needed."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if not self._config_path.exists():
            self._logger.info(
                f"Config file not found at {self._config_path}. Using defaults."
            )
            self._save_to_file()
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)

            if isinstance(loaded_config, dict):
                self._deep_merge(self._config, loaded_config)
                self._logger.info(f"Configuration loaded from {self._config_path}")
                # Save back to ensure any new default keys are persisted
                self._save_to_file()
            else:
                raise ValueError("Config file does not contain a valid JSON object")

        except (json.JSONDecodeError, ValueError) as e:
            self._logger.warning(
                f"Config file corrupted or invalid: {e}. Recreating with defaults."
            )
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._save_to_file()

        except (OSError, PermissionError) as e:
            self._logger.warning(
                f"Could not read config file: {e}. Using defaults."
            )

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Recursively merge override dict into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _save_to_file(self) -> None:
        """Save current configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2)

            self._logger.debug(f"Configuration saved to {self._config_path}")

        except (OSError, PermissionError) as e:
            self._logger.error(f"Could not save config file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key to retrieve.
            default: Default value if key doesn't exist.

        Returns:
            The configuration value, or default if not found.
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value (in memory only).

        Call save() to persist changes to disk.
        """
        self._config[key] = value
        self._logger.debug(f"Config key '{key}' set to '{value}'")

    def save(self) -> None:
        """Persist current configuration to disk."""
        self._save_to_file()

    # ─── Validation ───────────────────────────────────────────────────────

    def _fallback(self, key: str, value: Any, default: Any) -> Any:
        self._logger.warning(
            f"Invalid config value for '{key}': {value!r}. Using {default!r}."
        )
        return default

    def _positive_int(self, key: str, value: Any, default: int) -> int:
        """Parse a positive integer, falling back to default."""
        if isinstance(value, bool):
            return self._fallback(key, value, default)
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            return self._fallback(key, value, default)
        if number <= 0:
            return self._fallback(key, value, default)
        return number

    def _canvas_value(self, key: str) -> int:
        default = DEFAULT_CONFIG["canvas"][key]
        canvas = self.get("canvas", {})
        if not isinstance(canvas, dict):
            return self._fallback("canvas", canvas, default)
        return self._positive_int(f"canvas.{key}", canvas.get(key, default), default)

    # ─── General Settings ─────────────────────────────────────────────────

    @property
    def theme(self) -> str:
        return self.get("theme", "dark")

    @property
    def log_level(self) -> str:
        return self.get("log_level", "INFO")

    # ─── Canvas Settings ──────────────────────────────────────────────────

    @property
    def canvas_width(self) -> int:
        """Width of the blank surface created at startup."""
        return self._canvas_value("width")

    @property
    def canvas_height(self) -> int:
        """Height of the blank surface created at startup."""
        return self._canvas_value("height")

    # ─── Tool Settings ────────────────────────────────────────────────────

    @property
    def brush_sizes(self) -> List[int]:
        """Toolbar brush sizes; invalid entries are skipped."""
        default = DEFAULT_CONFIG["brush_sizes"]
        sizes = self.get("brush_sizes", default)
        if not isinstance(sizes, list):
            return list(self._fallback("brush_sizes", sizes, default))

        valid = [self._positive_int("brush_sizes", size, 0) for size in sizes]
        valid = [size for size in valid if size > 0]
        return valid or list(default)

    @property
    def default_brush_width(self) -> int:
        return self._positive_int(
            "default_brush_width",
            self.get("default_brush_width", 1),
            DEFAULT_CONFIG["default_brush_width"],
        )

    @property
    def default_color(self) -> str:
        """Brush color at startup as "#rrggbb"."""
        value = self.get("default_color", "#000000")
        if not isinstance(value, str) or not HEX_COLOR_PATTERN.match(value.strip()):
            return self._fallback("default_color", value, DEFAULT_CONFIG["default_color"])
        return value.strip()

    @property
    def default_tool(self) -> str:
        return self.get("default_tool", "Line")

    @property
    def spray_interval_ms(self) -> int:
        return self._positive_int(
            "spray_interval_ms",
            self.get("spray_interval_ms", 25),
            DEFAULT_CONFIG["spray_interval_ms"],
        )

    # ─── File Settings ────────────────────────────────────────────────────

    @property
    def default_save_folder(self) -> str:
        return self.get("default_save_folder", str(Path.home() / "Pictures" / "PixelPaint"))
