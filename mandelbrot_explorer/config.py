"""
Startup configuration for the explorer.

Values come from built-in defaults, optionally overridden by a JSON
settings file and then by command-line flags. The merged configuration is
validated once and never changes while the explorer runs.

Example settings.json:
    {
        "canvas_width": 1024,
        "canvas_height": 768,
        "initial_max_iterations": 800,
        "zoom_speed": 0.2,
        "anchor_mode": "exact"
    }
"""

import json
import logging
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)


ANCHOR_EXACT = 'exact'
ANCHOR_REFERENCE = 'reference'
ANCHOR_MODES = (ANCHOR_EXACT, ANCHOR_REFERENCE)


class ConfigError(ValueError):
    """Raised when a configuration value is outside its valid range."""


@dataclass(frozen=True)
class ExplorerConfig:
    """
    Fixed startup parameters.

    Attributes:
        canvas_width, canvas_height: Canvas size in pixels
        initial_max_iterations: Iteration budget at startup and after reset
        iteration_step: Budget increment, also the minimum budget
        zoom_speed: Each wheel notch scales the view by (1 + zoom_speed)
        anchor_mode: 'exact' keeps the point under the pointer fixed,
            'reference' uses the normalized-pointer recentering rule
        correct_aspect: Scale the vertical span by height / width
        parallel: Dispatch frame rows across threads
        frame_rate_cap: Frames per second limit, 0 for no limit
    """

    canvas_width: int = 800
    canvas_height: int = 600
    initial_max_iterations: int = 500
    iteration_step: int = 100
    zoom_speed: float = 0.1
    anchor_mode: str = ANCHOR_EXACT
    correct_aspect: bool = False
    parallel: bool = False
    frame_rate_cap: int = 60

    def validate(self):
        """Check every field; returns self so calls can be chained."""
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ConfigError(
                f"canvas must be at least 1x1, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.iteration_step <= 0:
            raise ConfigError(f"iteration_step must be positive, got {self.iteration_step}")
        if self.initial_max_iterations < self.iteration_step:
            raise ConfigError(
                f"initial_max_iterations ({self.initial_max_iterations}) "
                f"must be at least iteration_step ({self.iteration_step})"
            )
        if self.zoom_speed <= 0:
            raise ConfigError(f"zoom_speed must be positive, got {self.zoom_speed}")
        if self.anchor_mode not in ANCHOR_MODES:
            raise ConfigError(
                f"anchor_mode must be one of {', '.join(ANCHOR_MODES)}, got {self.anchor_mode!r}"
            )
        if self.frame_rate_cap < 0:
            raise ConfigError(f"frame_rate_cap must be >= 0, got {self.frame_rate_cap}")
        return self

    def with_overrides(self, **overrides):
        """Copy with the given fields replaced; None values are skipped."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_settings(path):
    """
    Load a settings dictionary from a JSON file.

    A missing file yields an empty dict. An unreadable or malformed file is
    reported as a warning and also yields an empty dict, so the explorer
    starts with its defaults.
    """
    try:
        with open(path, 'r') as f:
            settings = json.load(f)
    except FileNotFoundError:
        logger.info("No settings file at %s, using defaults", path)
        return {}
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return {}

    if not isinstance(settings, dict):
        logger.warning("Ignoring settings in %s: expected a JSON object", path)
        return {}
    return settings


def config_from_settings(settings, base=None):
    """
    Build a config from a settings dictionary.

    Unknown keys and values of the wrong type are logged and ignored. The
    result is not validated yet, so command-line overrides can still be
    applied on top.
    """
    base = base or ExplorerConfig()
    field_types = {f.name: f.type for f in fields(ExplorerConfig)}
    recognized = {}
    for key, value in settings.items():
        if key not in field_types:
            logger.warning("Ignoring unknown setting %r", key)
        elif not _value_matches(value, field_types[key]):
            logger.warning(
                "Ignoring setting %r: expected %s, got %r",
                key, field_types[key].__name__, value
            )
        else:
            recognized[key] = value
    return base.with_overrides(**recognized)


def _value_matches(value, field_type):
    # bool is an int subclass, but never a valid count or size
    if field_type is bool:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if field_type is float:
        return isinstance(value, (int, float))
    return isinstance(value, field_type)
