from __future__ import annotations

import configparser
import math
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QStandardPaths


@dataclass(frozen=True)
class SensorConfig:
    """Attitude sampling settings persisted to config.ini."""

    sample_rate_hz: int = 60
    sway_degrees: float = 12.0  # Simulated source only
    sway_period_s: float = 8.0


@dataclass(frozen=True)
class UiConfig:
    """UI settings persisted to config.ini."""

    update_hz: int = 30
    show_camera: bool = True
    window_width: int = 420
    window_height: int = 760


@dataclass(frozen=True)
class AppConfig:
    sensor: SensorConfig
    ui: UiConfig


# -------------------------------------------------------------------------
# Default values for all settings
# -------------------------------------------------------------------------

DEFAULT_SAMPLE_RATE_HZ: int = 60
MIN_SAMPLE_RATE_HZ: int = 1
MAX_SAMPLE_RATE_HZ: int = 200
DEFAULT_SWAY_DEGREES: float = 12.0
DEFAULT_SWAY_PERIOD_S: float = 8.0

DEFAULT_UPDATE_HZ: int = 30
MIN_UPDATE_HZ: int = 5
MAX_UPDATE_HZ: int = 120
DEFAULT_SHOW_CAMERA: bool = True
DEFAULT_WINDOW_WIDTH: int = 420
DEFAULT_WINDOW_HEIGHT: int = 760


def config_path() -> Path:
    # e.g., ~/.config/Clinometer/config.ini on Linux
    config_dir = Path(QStandardPaths.writableLocation(QStandardPaths.AppConfigLocation))
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / "config.ini"


def ensure_config_exists() -> None:
    """Create config.ini with all default values if it doesn't exist."""
    path = config_path()
    if path.exists():
        return

    parser = configparser.ConfigParser()
    parser["sensor"] = {
        "sample_rate_hz": str(DEFAULT_SAMPLE_RATE_HZ),
        "sway_degrees": str(DEFAULT_SWAY_DEGREES),
        "sway_period_s": str(DEFAULT_SWAY_PERIOD_S),
    }
    parser["ui"] = {
        "update_hz": str(DEFAULT_UPDATE_HZ),
        "show_camera": "true" if DEFAULT_SHOW_CAMERA else "false",
        "window_width": str(DEFAULT_WINDOW_WIDTH),
        "window_height": str(DEFAULT_WINDOW_HEIGHT),
    }

    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def _read_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    path = config_path()
    if path.exists():
        parser.read(path, encoding="utf-8")
    return parser


def _write_parser(parser: configparser.ConfigParser) -> None:
    path = config_path()
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {text!r}")
    return value


def load_sensor_config() -> SensorConfig:
    """Load sensor settings, falling back to defaults for a missing or broken section."""
    parser = _read_parser()
    if "sensor" not in parser:
        return SensorConfig()
    section = parser["sensor"]
    try:
        rate = int(section.get("sample_rate_hz", str(DEFAULT_SAMPLE_RATE_HZ)))
        sway = _finite_float(section.get("sway_degrees", str(DEFAULT_SWAY_DEGREES)))
        period = _finite_float(section.get("sway_period_s", str(DEFAULT_SWAY_PERIOD_S)))
        return SensorConfig(
            sample_rate_hz=max(MIN_SAMPLE_RATE_HZ, min(MAX_SAMPLE_RATE_HZ, rate)),
            sway_degrees=sway,
            sway_period_s=period,
        )
    except ValueError:
        return SensorConfig()


def save_sensor_config(cfg: SensorConfig) -> None:
    parser = _read_parser()
    parser["sensor"] = {
        "sample_rate_hz": str(int(cfg.sample_rate_hz)),
        "sway_degrees": str(float(cfg.sway_degrees)),
        "sway_period_s": str(float(cfg.sway_period_s)),
    }
    _write_parser(parser)


def load_ui_config() -> UiConfig:
    """Load UI settings, falling back to defaults for a missing or broken section."""
    parser = _read_parser()
    if "ui" not in parser:
        return UiConfig()
    section = parser["ui"]
    try:
        update_hz = int(section.get("update_hz", str(DEFAULT_UPDATE_HZ)))
        return UiConfig(
            update_hz=max(MIN_UPDATE_HZ, min(MAX_UPDATE_HZ, update_hz)),
            show_camera=section.getboolean("show_camera", fallback=DEFAULT_SHOW_CAMERA),
            window_width=int(section.get("window_width", str(DEFAULT_WINDOW_WIDTH))),
            window_height=int(section.get("window_height", str(DEFAULT_WINDOW_HEIGHT))),
        )
    except ValueError:
        return UiConfig()


def save_ui_config(cfg: UiConfig) -> None:
    parser = _read_parser()
    parser["ui"] = {
        "update_hz": str(int(cfg.update_hz)),
        "show_camera": "true" if bool(cfg.show_camera) else "false",
        "window_width": str(int(cfg.window_width)),
        "window_height": str(int(cfg.window_height)),
    }
    _write_parser(parser)


def load_app_config() -> AppConfig:
    """Load the full configuration, creating default config if needed."""
    ensure_config_exists()
    return AppConfig(sensor=load_sensor_config(), ui=load_ui_config())
