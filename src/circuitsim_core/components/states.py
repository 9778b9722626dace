# src/circuitsim_core/components/states.py
"""
Fixed, typed state records for every component kind.

Each record holds three groups of fields:

- defining parameters, set by the user and changed only by explicit actions
  (resistance, capacitance, wiper position, ...);
- ratings, the thresholds the protection evaluator compares against;
- observed quantities, overwritten by the component's model on every tick
  (voltage, current, power, and kind-specific physics such as charge or heat).

Records persist across ticks and are mutated in place by the models. The
pairing of kind and record class is fixed by `STATE_CLASSES`.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Type

from ..constants import AMBIENT_TEMPERATURE_C
from .base_enums import ComponentKind
from .waveforms import WaveformConfig, waveform_value


@dataclass
class ResistorState:
    resistance: float = 1000.0
    max_power: float = 0.25
    critical_power: float = 10.0
    max_current: float = 10.0
    max_temperature: float = 150.0
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    temperature: float = AMBIENT_TEMPERATURE_C


@dataclass
class CapacitorState:
    capacitance: float = 100e-6
    max_voltage: float = 50.0
    voltage: float = 0.0
    current: float = 0.0
    charge: float = 0.0
    energy: float = 0.0
    power: float = 0.0


@dataclass
class InductorState:
    inductance: float = 1e-3
    max_current: float = 10.0
    max_power: float = 10.0
    voltage: float = 0.0
    current: float = 0.0
    energy: float = 0.0
    flux: float = 0.0
    power: float = 0.0
    # Set when the integrated current had to be clamped to max_current this tick.
    saturated: bool = False


@dataclass
class DiodeState:
    forward_voltage: float = 0.7
    reverse_breakdown: float = 50.0
    max_current: float = 1.0
    max_power: float = 1.0
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    conducting: bool = False


@dataclass
class LedState:
    forward_voltage: float = 2.0
    color: str = "#ff0000"
    max_current: float = 0.02
    max_reverse_voltage: float = 5.0
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    brightness: float = 0.0


@dataclass
class FuseState:
    rating: float = 1.0
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    heat_accumulated: float = 0.0
    blown: bool = False


@dataclass
class LampState:
    voltage_rating: float = 12.0
    power_rating: float = 60.0
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    brightness: float = 0.0
    broken: bool = False

    @property
    def resistance(self) -> float:
        """Hot-filament resistance derived from the ratings, R = V^2 / P."""
        return self.voltage_rating ** 2 / self.power_rating


@dataclass
class PotentiometerState:
    max_resistance: float = 10_000.0
    wiper_percent: float = 50.0
    max_power: float = 0.5
    voltage: float = 0.0
    current: float = 0.0
    power: float = 0.0
    temperature: float = AMBIENT_TEMPERATURE_C

    @property
    def resistance(self) -> float:
        """Resistance between the two terminals at the present wiper position."""
        return self.max_resistance * self.wiper_percent / 100.0


@dataclass
class SwitchState:
    closed: bool = False
    max_current: float = 10.0
    voltage: float = 0.0
    current: float = 0.0


@dataclass
class BatteryState:
    nominal_voltage: float = 9.0
    capacity_mah: float = 500.0
    internal_resistance: float = 0.1
    max_current: float = 5.0
    # Present EMF; sags below nominal as the charge runs out.
    voltage: Optional[float] = None
    charge_remaining_mah: Optional[float] = None
    charge_percent: float = 100.0
    current: float = 0.0
    power: float = 0.0

    def __post_init__(self):
        if self.voltage is None:
            self.voltage = self.nominal_voltage
        if self.charge_remaining_mah is None:
            self.charge_remaining_mah = self.capacity_mah
        if self.capacity_mah > 0:
            self.charge_percent = self.charge_remaining_mah / self.capacity_mah * 100.0


@dataclass
class VoltageSourceState:
    amplitude: float = 5.0
    waveform: WaveformConfig = field(default_factory=WaveformConfig)
    max_current: float = 1.0
    # The voltage enforced by the next solve; recomputed from the waveform every tick.
    output_voltage: Optional[float] = None
    current: float = 0.0
    power: float = 0.0
    max_power: float = 0.0

    def __post_init__(self):
        if self.output_voltage is None:
            self.output_voltage = waveform_value(self.waveform, self.amplitude, 0.0)
        self.max_power = abs(self.output_voltage) * self.max_current


@dataclass
class GroundState:
    voltage: float = 0.0
    current: float = 0.0


STATE_CLASSES: Dict[ComponentKind, Type] = {
    ComponentKind.RESISTOR: ResistorState,
    ComponentKind.CAPACITOR: CapacitorState,
    ComponentKind.INDUCTOR: InductorState,
    ComponentKind.DIODE: DiodeState,
    ComponentKind.LED: LedState,
    ComponentKind.FUSE: FuseState,
    ComponentKind.LAMP: LampState,
    ComponentKind.POTENTIOMETER: PotentiometerState,
    ComponentKind.SWITCH: SwitchState,
    ComponentKind.BATTERY: BatteryState,
    ComponentKind.VOLTAGE_SOURCE: VoltageSourceState,
    ComponentKind.GROUND: GroundState,
}
