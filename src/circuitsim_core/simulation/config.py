# src/circuitsim_core/simulation/config.py
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pint

from ..constants import DEFAULT_TIME_STEP_S, MIN_TIME_STEP_S
from ..units import to_magnitude

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    Run-level settings. The tick length actually applied is
    max(time_step * speed, min_time_step).
    """
    time_step: float = DEFAULT_TIME_STEP_S
    speed: float = 1.0
    min_time_step: float = MIN_TIME_STEP_S

    def effective_time_step(self, delta_time: Optional[float] = None) -> float:
        base = self.time_step if delta_time is None else delta_time
        return max(base * self.speed, self.min_time_step)


def _positive_seconds(raw: Dict[str, Any], key: str, default: float) -> float:
    if raw.get(key) is None:
        return default
    value = to_magnitude(raw[key], "s")
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"'{key}' must be a positive duration, got {raw[key]!r}.")
    return value


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Parses the raw `simulation` section of a circuit file into a SimulationConfig.
    A missing or empty section yields the defaults. Durations accept plain
    seconds or unit strings such as "10 ms".
    """
    if not raw_config:
        return SimulationConfig()
    try:
        time_step = _positive_seconds(raw_config, 'time_step', DEFAULT_TIME_STEP_S)
        min_time_step = _positive_seconds(raw_config, 'min_time_step', MIN_TIME_STEP_S)
        speed = float(raw_config.get('speed', 1.0))
        if not (math.isfinite(speed) and speed > 0):
            raise ValueError(f"'speed' must be a positive multiplier, got {raw_config.get('speed')!r}.")
        config = SimulationConfig(time_step=time_step, speed=speed, min_time_step=min_time_step)
        logger.debug(f"Parsed simulation config: {config}")
        return config
    except (TypeError, ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e
