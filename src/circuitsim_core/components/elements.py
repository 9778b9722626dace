# src/circuitsim_core/components/elements.py
"""
This module provides the concrete models for all twelve component kinds.

Every model is a stateless bundle of class methods registered against its
ComponentKind. The MnaAssembler asks it how to stamp, the SimulationEngine asks
it to advance the state record from the solved values, and the
ProtectionEvaluator asks it for the faults the state exhibits.
"""

import logging
import math
from typing import List

from ..constants import (
    AMBIENT_TEMPERATURE_C, BATTERY_DEPLETED_PERCENT, BATTERY_SAG_FLOOR,
    CAPACITOR_REVERSE_THRESHOLD_V, DIODE_BREAKDOWN_SLOPE, DIODE_FORWARD_SLOPE,
    DIODE_LINEAR_RESISTANCE_OHMS, FUSE_BLOW_THRESHOLD, FUSE_COOLING_RATE,
    LAMP_BURNOUT_FACTOR, LAMP_MAX_BRIGHTNESS, LED_FORWARD_SLOPE,
    LED_LINEAR_RESISTANCE_OHMS, MIN_RESISTANCE_OHMS, OPEN_CIRCUIT_RESISTANCE_OHMS,
    POTENTIOMETER_CRITICAL_FACTOR, SECONDS_PER_HOUR, SHORT_CIRCUIT_RESISTANCE_OHMS,
    SOURCE_SHORT_CIRCUIT_CURRENT_A, THERMAL_RELAXATION_RATE, THERMAL_RESISTANCE_C_PER_W,
)
from ..protection.fault_codes import FaultCode
from ..protection.faults import Fault
from .base import ComponentModel, SolvedPort, register_model
from .base_enums import ComponentKind, StampType
from .exceptions import ComponentError
from .waveforms import waveform_value


logger = logging.getLogger(__name__)


def _require_positive(component, **fields: float) -> None:
    """Raises ComponentError for the first field that is not a finite, positive number."""
    for name, value in fields.items():
        if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
            raise ComponentError(
                component_id=component.id,
                details=f"Parameter '{name}' must be a finite, positive number, got {value!r}.",
            )


def _report(code: FaultCode, component, sim_time: float, **kwargs) -> Fault:
    return code.report(component.id, component_ids=(component.id,), sim_time=sim_time, **kwargs)


@register_model(ComponentKind.RESISTOR)
class ResistorModel(ComponentModel):
    """An ideal resistor with a steady-state thermal estimate."""

    @classmethod
    def validate(cls, component):
        _require_positive(component, resistance=component.state.resistance)

    @classmethod
    def resistance(cls, state):
        return state.resistance

    @classmethod
    def update(cls, component, port: SolvedPort, delta_time, sim_time):
        state = component.state
        state.voltage = abs(port.drop)
        state.current = state.voltage / state.resistance
        state.power = state.current ** 2 * state.resistance
        state.temperature = AMBIENT_TEMPERATURE_C + state.power * THERMAL_RESISTANCE_C_PER_W
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time) -> List[Fault]:
        state = component.state
        faults = []
        if state.power > state.critical_power:
            faults.append(_report(FaultCode.RESISTOR_CRITICAL_OVERPOWER, component, sim_time, power=state.power))
        elif state.power > state.max_power:
            faults.append(_report(FaultCode.RESISTOR_OVERPOWER, component, sim_time,
                                  power=state.power, max_power=state.max_power))
        if abs(state.current) > state.max_current:
            faults.append(_report(FaultCode.RESISTOR_OVERCURRENT, component, sim_time, current=abs(state.current)))
        if state.temperature > state.max_temperature:
            faults.append(_report(FaultCode.RESISTOR_OVERTEMP, component, sim_time,
                                  temperature=state.temperature, max_temperature=state.max_temperature))
        return faults


@register_model(ComponentKind.CAPACITOR)
class CapacitorModel(ComponentModel):
    """
    A capacitor. In the DC network it is a near-open element; its current is
    reconstructed afterwards from the change in voltage over the tick.
    """
    terminal_names = ("positive", "negative")

    @classmethod
    def validate(cls, component):
        _require_positive(component, capacitance=component.state.capacitance)

    @classmethod
    def resistance(cls, state):
        return OPEN_CIRCUIT_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        previous_voltage = state.voltage
        state.voltage = port.drop
        state.current = state.capacitance * (state.voltage - previous_voltage) / delta_time
        state.charge = state.capacitance * state.voltage
        state.energy = 0.5 * state.capacitance * state.voltage ** 2
        state.power = state.voltage * state.current
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if abs(state.voltage) > state.max_voltage:
            faults.append(_report(FaultCode.CAPACITOR_OVERVOLTAGE, component, sim_time,
                                  voltage=abs(state.voltage), max_voltage=state.max_voltage))
        if state.voltage < CAPACITOR_REVERSE_THRESHOLD_V:
            faults.append(_report(FaultCode.CAPACITOR_REVERSE, component, sim_time, voltage=state.voltage))
        return faults


@register_model(ComponentKind.INDUCTOR)
class InductorModel(ComponentModel):
    """An inductor: a near-short in the network, with its current integrated by forward Euler."""

    @classmethod
    def validate(cls, component):
        _require_positive(component, inductance=component.state.inductance,
                          max_current=component.state.max_current)

    @classmethod
    def resistance(cls, state):
        return SHORT_CIRCUIT_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        integrated = state.current + state.voltage * delta_time / state.inductance
        state.saturated = abs(integrated) > state.max_current
        state.current = max(-state.max_current, min(state.max_current, integrated))
        state.energy = 0.5 * state.inductance * state.current ** 2
        state.flux = state.inductance * state.current
        state.power = state.voltage * state.current
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if state.saturated:
            faults.append(_report(FaultCode.INDUCTOR_SATURATION, component, sim_time, max_current=state.max_current))
        if state.power > state.max_power:
            faults.append(_report(FaultCode.INDUCTOR_OVERPOWER, component, sim_time, power=state.power))
        return faults


@register_model(ComponentKind.DIODE)
class DiodeModel(ComponentModel):
    """
    A diode stamped as a fixed linear resistance. Its reported current follows
    a piecewise-linear law: forward conduction above Vf, avalanche below
    -breakdown, blocking in between.
    """
    terminal_names = ("anode", "cathode")

    @classmethod
    def resistance(cls, state):
        return DIODE_LINEAR_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        if state.voltage > state.forward_voltage:
            state.conducting = True
            state.current = min((state.voltage - state.forward_voltage) * DIODE_FORWARD_SLOPE, state.max_current)
        elif state.voltage < -state.reverse_breakdown:
            state.conducting = True
            state.current = -(abs(state.voltage) - state.reverse_breakdown) * DIODE_BREAKDOWN_SLOPE
        else:
            state.conducting = False
            state.current = 0.0
        state.power = abs(state.voltage * state.current)
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if abs(state.current) > state.max_current:
            faults.append(_report(FaultCode.DIODE_OVERCURRENT, component, sim_time,
                                  current=abs(state.current), max_current=state.max_current))
        if state.voltage < -state.reverse_breakdown:
            faults.append(_report(FaultCode.DIODE_BREAKDOWN, component, sim_time, voltage=abs(state.voltage)))
        if state.power > state.max_power:
            faults.append(_report(FaultCode.DIODE_OVERPOWER, component, sim_time, power=state.power))
        return faults


@register_model(ComponentKind.LED)
class LedModel(ComponentModel):
    terminal_names = ("anode", "cathode")

    @classmethod
    def validate(cls, component):
        _require_positive(component, max_current=component.state.max_current)

    @classmethod
    def resistance(cls, state):
        return LED_LINEAR_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        if state.voltage > state.forward_voltage:
            state.current = min((state.voltage - state.forward_voltage) * LED_FORWARD_SLOPE, state.max_current)
            state.brightness = min(state.current / state.max_current, 1.0)
        else:
            state.current = 0.0
            state.brightness = 0.0
        state.power = state.voltage * state.current
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if state.current > state.max_current:
            faults.append(_report(FaultCode.LED_OVERCURRENT, component, sim_time,
                                  current_ma=state.current * 1000, max_current_ma=state.max_current * 1000))
        if state.voltage < -state.max_reverse_voltage:
            faults.append(_report(FaultCode.LED_REVERSE, component, sim_time, voltage=state.voltage))
        return faults


@register_model(ComponentKind.FUSE)
class FuseModel(ComponentModel):
    """
    A fuse with an I^2*t heat model. Heat accumulates while the current exceeds
    the rating and decays otherwise; past the blow threshold the fuse opens and
    stays open until it is replaced.
    """
    terminal_names = ("in", "out")

    @classmethod
    def validate(cls, component):
        _require_positive(component, rating=component.state.rating)

    @classmethod
    def resistance(cls, state):
        return OPEN_CIRCUIT_RESISTANCE_OHMS if state.blown else SHORT_CIRCUIT_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        if state.blown:
            state.current = 0.0
            state.power = 0.0
        else:
            state.current = state.voltage / SHORT_CIRCUIT_RESISTANCE_OHMS
            state.power = abs(state.voltage * state.current)
            ratio = abs(state.current) / state.rating
            if ratio > 1:
                state.heat_accumulated += ratio ** 2 * delta_time
                if state.heat_accumulated > FUSE_BLOW_THRESHOLD:
                    state.blown = True
                    logger.info(f"Fuse '{component.id}' blew at t={sim_time:.4f}s "
                                f"({abs(state.current):.2f}A against a {state.rating}A rating).")
            else:
                state.heat_accumulated = max(0.0, state.heat_accumulated - delta_time * FUSE_COOLING_RATE)
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        if component.state.blown:
            return [_report(FaultCode.FUSE_BLOWN, component, sim_time, rating=component.state.rating)]
        return []


@register_model(ComponentKind.LAMP)
class LampModel(ComponentModel):
    """An incandescent lamp that burns out permanently when overdriven."""
    terminal_names = ("t1", "t2")

    @classmethod
    def validate(cls, component):
        _require_positive(component, voltage_rating=component.state.voltage_rating,
                          power_rating=component.state.power_rating)

    @classmethod
    def resistance(cls, state):
        return OPEN_CIRCUIT_RESISTANCE_OHMS if state.broken else state.resistance

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        if state.broken:
            state.current = 0.0
            state.power = 0.0
            state.brightness = 0.0
        else:
            state.current = state.voltage / state.resistance
            state.power = abs(state.voltage * state.current)
            state.brightness = min(math.sqrt(state.power / state.power_rating), LAMP_MAX_BRIGHTNESS)
            if state.power > state.power_rating * LAMP_BURNOUT_FACTOR:
                state.broken = True
                logger.info(f"Lamp '{component.id}' burned out at t={sim_time:.4f}s ({state.power:.1f}W).")
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        if state.broken:
            return [_report(FaultCode.LAMP_BROKEN, component, sim_time,
                            max_power=state.power_rating * LAMP_BURNOUT_FACTOR)]
        return []


@register_model(ComponentKind.POTENTIOMETER)
class PotentiometerModel(ComponentModel):

    @classmethod
    def validate(cls, component):
        state = component.state
        _require_positive(component, max_resistance=state.max_resistance)
        if not 0.0 <= state.wiper_percent <= 100.0:
            raise ComponentError(
                component_id=component.id,
                details=f"Wiper position must be within 0-100 %, got {state.wiper_percent!r}.",
            )

    @classmethod
    def resistance(cls, state):
        return max(state.resistance, MIN_RESISTANCE_OHMS)

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        state.current = state.voltage / cls.resistance(state)
        state.power = abs(state.voltage * state.current)
        target = AMBIENT_TEMPERATURE_C + state.power * THERMAL_RESISTANCE_C_PER_W
        # Relaxation factor capped at 1 so long ticks settle instead of overshooting.
        state.temperature += (target - state.temperature) * min(delta_time * THERMAL_RELAXATION_RATE, 1.0)
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        if state.power > state.max_power * POTENTIOMETER_CRITICAL_FACTOR:
            return [_report(FaultCode.POTENTIOMETER_CRITICAL_OVERPOWER, component, sim_time, power=state.power)]
        if state.power > state.max_power:
            return [_report(FaultCode.POTENTIOMETER_OVERPOWER, component, sim_time,
                            power=state.power, max_power=state.max_power)]
        return []


@register_model(ComponentKind.SWITCH)
class SwitchModel(ComponentModel):
    terminal_names = ("in", "out")

    @classmethod
    def resistance(cls, state):
        return SHORT_CIRCUIT_RESISTANCE_OHMS if state.closed else OPEN_CIRCUIT_RESISTANCE_OHMS

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = port.drop
        state.current = state.voltage / cls.resistance(state)
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        if abs(state.current) > state.max_current:
            return [_report(FaultCode.SWITCH_OVERCURRENT, component, sim_time,
                            current=abs(state.current), max_current=state.max_current)]
        return []


@register_model(ComponentKind.BATTERY)
class BatteryModel(ComponentModel):
    """
    A battery: an ideal EMF in series with its internal resistance, folded into
    a single branch row. The EMF sags with depletion, never below
    BATTERY_SAG_FLOOR of nominal, and is always derived from the nominal voltage.
    """
    terminal_names = ("positive", "negative")
    stamp_type = StampType.BRANCH

    @classmethod
    def validate(cls, component):
        state = component.state
        _require_positive(component, capacity_mah=state.capacity_mah)
        if not (math.isfinite(state.internal_resistance) and state.internal_resistance >= 0):
            raise ComponentError(
                component_id=component.id,
                details=f"Internal resistance must be finite and non-negative, got {state.internal_resistance!r}.",
            )

    @classmethod
    def branch_voltage(cls, state):
        return state.voltage

    @classmethod
    def branch_resistance(cls, state):
        return state.internal_resistance

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        terminal_voltage = port.drop
        if state.internal_resistance > 0:
            state.current = (state.voltage - terminal_voltage) / state.internal_resistance
        else:
            state.current = port.current
        state.power = abs(terminal_voltage * state.current)

        if state.current > 0:
            used_mah = state.current * delta_time * 1000.0 / SECONDS_PER_HOUR
            state.charge_remaining_mah = max(0.0, state.charge_remaining_mah - used_mah)
        state.charge_percent = state.charge_remaining_mah / state.capacity_mah * 100.0
        state.voltage = state.nominal_voltage * max(BATTERY_SAG_FLOOR, state.charge_percent / 100.0)
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if state.charge_percent < BATTERY_DEPLETED_PERCENT:
            faults.append(_report(FaultCode.BATTERY_DEPLETED, component, sim_time,
                                  charge_percent=state.charge_percent))
        if abs(state.current) > state.max_current:
            faults.append(_report(FaultCode.BATTERY_OVERCURRENT, component, sim_time, current=abs(state.current)))
        return faults


@register_model(ComponentKind.VOLTAGE_SOURCE)
class VoltageSourceModel(ComponentModel):
    """
    An ideal voltage source driven by the waveform generator. The voltage used
    in a solve is the one computed at the end of the previous tick.
    """
    terminal_names = ("positive", "negative")
    stamp_type = StampType.BRANCH

    @classmethod
    def branch_voltage(cls, state):
        return state.output_voltage

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.current = port.current
        state.max_power = abs(state.output_voltage) * state.max_current
        state.power = abs(state.output_voltage * state.current)
        cls.write_terminals(component, port, state.current)
        state.output_voltage = waveform_value(state.waveform, state.amplitude, sim_time)

    @classmethod
    def check_faults(cls, component, sim_time):
        state = component.state
        faults = []
        if state.current > state.max_current:
            faults.append(_report(FaultCode.SOURCE_OVERLOADED, component, sim_time,
                                  current=state.current, max_current=state.max_current))
        if state.power > state.max_power:
            faults.append(_report(FaultCode.SOURCE_OVERPOWER, component, sim_time,
                                  power=state.power, max_power=state.max_power))
        if state.current > SOURCE_SHORT_CIRCUIT_CURRENT_A:
            faults.append(_report(FaultCode.SOURCE_SHORT, component, sim_time))
        return faults


@register_model(ComponentKind.GROUND)
class GroundModel(ComponentModel):
    """The reference point: a 0 V branch that ties both of its terminals together."""
    terminal_names = ("ground", "reference")
    stamp_type = StampType.BRANCH

    @classmethod
    def branch_voltage(cls, state):
        return 0.0

    @classmethod
    def update(cls, component, port, delta_time, sim_time):
        state = component.state
        state.voltage = 0.0
        state.current = port.current
        cls.write_terminals(component, port, state.current)

    @classmethod
    def check_faults(cls, component, sim_time):
        return []
