"""
AsciiCam Configuration
======================

This module handles configuration loading for the ASCII camera.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    ASCIICAM_COLUMNS       -> render.columns
    ASCIICAM_DENSITY       -> render.density
    ASCIICAM_CHARSET       -> render.charset
    ASCIICAM_INVERT        -> render.invert
    ASCIICAM_CAMERA_INDEX  -> source.camera_index
    ASCIICAM_FPS           -> clock.fps
    ASCIICAM_DISPLAY       -> display.mode
    ASCIICAM_PORT          -> server.port
    ASCIICAM_LOG_LEVEL     -> logging.level

Example:
    settings = load_config("config.yaml")
    setup_logging(settings)
    print(settings.render.columns)
"""

import os
import logging
from pathlib import Path
from typing import Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class RenderConfig(BaseModel):
    """Initial render controls (may be changed at runtime)."""

    columns: float = Field(default=120, description="Base column count (clamped to [40, 240])")
    density: float = Field(default=1.0, description="Density multiplier on columns")
    charset: str = Field(
        default="standard",
        min_length=1,
        description="Preset ramp name or literal ramp (sparse to dense)",
    )
    invert: bool = Field(default=False, description="Invert luminance")
    char_aspect: float = Field(
        default=2.0,
        gt=0,
        description="Glyph height/width ratio used to derive grid height",
    )


class SourceConfig(BaseModel):
    """Frame source configuration."""

    camera_index: int = Field(default=0, ge=0, description="OpenCV camera index")
    image_path: Optional[str] = Field(
        default=None,
        description="Still image to use instead of a camera",
    )


class ClockConfig(BaseModel):
    """Frame clock configuration."""

    fps: float = Field(default=30.0, gt=0, le=240, description="Tick rate")
    log_every_n_ticks: int = Field(
        default=300,
        ge=1,
        description="Log a tick summary every N ticks",
    )


class DisplayConfig(BaseModel):
    """Display configuration."""

    mode: Literal["window", "terminal", "none"] = Field(
        default="window",
        description="Display: 'window', 'terminal' or 'none' (off-screen)",
    )
    window_name: str = Field(default="AsciiCam", description="OpenCV window title")
    width: int = Field(default=1280, ge=1, description="Viewport width in pixels")
    height: int = Field(default=720, ge=1, description="Viewport height in pixels")
    font_scale: float = Field(default=0.4, gt=0, description="Hershey font scale")
    thickness: int = Field(default=1, ge=1, description="Glyph stroke thickness")
    background: Tuple[int, int, int] = Field(
        default=(0, 0, 0),
        description="Background color (BGR)",
    )
    foreground: Tuple[int, int, int] = Field(
        default=(0, 255, 0),
        description="Glyph color (BGR)",
    )


class ServerConfig(BaseModel):
    """Control API server configuration."""

    enabled: bool = Field(default=False, description="Serve the control API")
    host: str = Field(default="127.0.0.1", description="Bind host")
    port: int = Field(default=8002, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for AsciiCam.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    render: RenderConfig = Field(default_factory=RenderConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("asciicam.yaml"),
            Path("config.yaml"),
            Path("config.yml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Render controls
    if env_cols := os.environ.get("ASCIICAM_COLUMNS"):
        config_data.setdefault("render", {})["columns"] = float(env_cols)
    if env_density := os.environ.get("ASCIICAM_DENSITY"):
        config_data.setdefault("render", {})["density"] = float(env_density)
    if env_charset := os.environ.get("ASCIICAM_CHARSET"):
        config_data.setdefault("render", {})["charset"] = env_charset
    if env_invert := os.environ.get("ASCIICAM_INVERT"):
        config_data.setdefault("render", {})["invert"] = _parse_bool(env_invert)

    # Source
    if env_cam := os.environ.get("ASCIICAM_CAMERA_INDEX"):
        config_data.setdefault("source", {})["camera_index"] = int(env_cam)

    # Clock / display
    if env_fps := os.environ.get("ASCIICAM_FPS"):
        config_data.setdefault("clock", {})["fps"] = float(env_fps)
    if env_display := os.environ.get("ASCIICAM_DISPLAY"):
        config_data.setdefault("display", {})["mode"] = env_display

    # Server
    if env_port := os.environ.get("ASCIICAM_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    # Logging
    if env_log := os.environ.get("ASCIICAM_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
