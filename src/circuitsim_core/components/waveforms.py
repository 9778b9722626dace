# src/circuitsim_core/components/waveforms.py
"""
The voltage source's waveform generator.

Values are a pure function of the configuration, the amplitude and the
simulation time, so identical runs reproduce identical voltages.
"""
import math
from dataclasses import dataclass

from .base_enums import WaveformType


@dataclass(frozen=True)
class WaveformConfig:
    type: WaveformType = WaveformType.DC
    frequency: float = 60.0   # Hz
    duty_cycle: float = 0.5   # 0-1, used by SQUARE and PULSE
    phase: float = 0.0        # radians
    offset: float = 0.0       # V, added to every non-DC shape


def cycle_position(config: WaveformConfig, sim_time: float) -> float:
    """Fraction of the current period that has elapsed, in [0, 1)."""
    return (config.frequency * sim_time + config.phase / (2 * math.pi)) % 1.0


def waveform_value(config: WaveformConfig, amplitude: float, sim_time: float) -> float:
    """Instantaneous output voltage of the generator at `sim_time` seconds."""
    if config.type is WaveformType.DC:
        return amplitude
    if config.type is WaveformType.SINE:
        return amplitude * math.sin(2 * math.pi * config.frequency * sim_time + config.phase) + config.offset

    position = cycle_position(config, sim_time)
    if config.type is WaveformType.SQUARE:
        level = amplitude if position < config.duty_cycle else -amplitude
    elif config.type is WaveformType.PULSE:
        level = amplitude if position < config.duty_cycle else 0.0
    elif config.type is WaveformType.TRIANGLE:
        level = amplitude * (4 * position - 1) if position < 0.5 else amplitude * (3 - 4 * position)
    else:
        raise ValueError(f"Unsupported waveform type: {config.type!r}")
    return level + config.offset
