# src/circuitsim_core/components/actions.py
"""
Explicit external operations on component state.

These are the only way irreversible transitions are undone (a blown fuse, a
burned-out lamp, a drained battery) and the only way defining parameters such
as the switch position or the wiper position change between ticks.
"""
# Required for forward references in type hints
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from ..constants import BATTERY_SAG_FLOOR
from .base_enums import ComponentKind, WaveformType
from .exceptions import ComponentError
from .waveforms import WaveformConfig, waveform_value

if TYPE_CHECKING:
    from ..data_structures import Component

logger = logging.getLogger(__name__)


def _expect_kind(component: Component, kind: ComponentKind, action: str) -> None:
    if component.kind is not kind:
        raise ComponentError(
            component_id=component.id,
            details=f"Action '{action}' applies to {kind} components, not {component.kind}.",
        )


def replace_fuse(component: Component) -> None:
    """Installs a fresh fuse: intact, with no accumulated heat."""
    _expect_kind(component, ComponentKind.FUSE, "replace_fuse")
    state = component.state
    state.blown = False
    state.heat_accumulated = 0.0
    state.current = 0.0
    state.power = 0.0
    logger.info(f"Fuse '{component.id}' replaced.")


def repair_lamp(component: Component) -> None:
    _expect_kind(component, ComponentKind.LAMP, "repair_lamp")
    state = component.state
    state.broken = False
    state.brightness = 0.0
    state.current = 0.0
    state.power = 0.0
    logger.info(f"Lamp '{component.id}' repaired.")


def recharge_battery(component: Component, percent: float = 100.0) -> None:
    """Restores a battery's charge to `percent` of capacity and its EMF accordingly."""
    _expect_kind(component, ComponentKind.BATTERY, "recharge_battery")
    if not 0.0 <= percent <= 100.0:
        raise ComponentError(component_id=component.id, details=f"Charge level must be within 0-100 %, got {percent!r}.")
    state = component.state
    state.charge_remaining_mah = state.capacity_mah * percent / 100.0
    state.charge_percent = percent
    state.voltage = state.nominal_voltage * max(BATTERY_SAG_FLOOR, percent / 100.0)
    logger.info(f"Battery '{component.id}' recharged to {percent:.0f}%.")


def set_switch(component: Component, closed: bool) -> None:
    _expect_kind(component, ComponentKind.SWITCH, "set_switch")
    component.state.closed = bool(closed)
    logger.debug(f"Switch '{component.id}' {'closed' if closed else 'opened'}.")


def toggle_switch(component: Component) -> bool:
    """Flips the switch and returns its new position (True = closed)."""
    _expect_kind(component, ComponentKind.SWITCH, "toggle_switch")
    set_switch(component, not component.state.closed)
    return component.state.closed


def set_wiper(component: Component, percent: float) -> float:
    """Moves the potentiometer wiper, clamped to 0-100 %. Returns the applied position."""
    _expect_kind(component, ComponentKind.POTENTIOMETER, "set_wiper")
    applied = max(0.0, min(100.0, float(percent)))
    component.state.wiper_percent = applied
    logger.debug(f"Potentiometer '{component.id}' wiper set to {applied:.1f}%.")
    return applied


def set_waveform(
    component: Component,
    waveform_type: Optional[WaveformType] = None,
    sim_time: float = 0.0,
    amplitude: Optional[float] = None,
    **settings: float,
) -> WaveformConfig:
    """
    Reconfigures a voltage source's generator. `settings` may override
    `frequency`, `duty_cycle`, `phase` and `offset`. The output voltage is
    recomputed at `sim_time` so the change takes effect on the next tick.
    """
    _expect_kind(component, ComponentKind.VOLTAGE_SOURCE, "set_waveform")
    state = component.state
    unknown = set(settings) - {"frequency", "duty_cycle", "phase", "offset"}
    if unknown:
        raise ComponentError(component_id=component.id, details=f"Unknown waveform settings: {sorted(unknown)}.")

    if waveform_type is not None:
        settings["type"] = WaveformType(waveform_type)
    state.waveform = replace(state.waveform, **settings)
    if amplitude is not None:
        state.amplitude = float(amplitude)
    state.output_voltage = waveform_value(state.waveform, state.amplitude, sim_time)
    state.max_power = abs(state.output_voltage) * state.max_current
    logger.debug(f"Voltage source '{component.id}' waveform set to {state.waveform}.")
    return state.waveform
