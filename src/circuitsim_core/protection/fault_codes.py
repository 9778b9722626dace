# src/circuitsim_core/protection/fault_codes.py
import logging
from enum import Enum
from typing import Sequence

from .faults import Fault, FaultSeverity

logger = logging.getLogger(__name__)

_W = FaultSeverity.WARNING
_E = FaultSeverity.ERROR
_C = FaultSeverity.CRITICAL


class FaultCode(Enum):
    """
    Registry of fault codes and their message templates.
    Each enum member's value is a tuple:
    (code_str, severity, stops_simulation, message_template_str).
    """

    # --- Resistor ---
    RESISTOR_CRITICAL_OVERPOWER = ("critical-overpower", _C, True, "DANGER! Resistor power ({power:.2f}W) far exceeds safe limits! Fire hazard!")
    RESISTOR_OVERPOWER = ("overpower", _W, False, "Resistor power dissipation ({power:.2f}W) exceeds rating ({max_power}W)")
    RESISTOR_OVERCURRENT = ("overcurrent", _C, True, "DANGER! Resistor current ({current:.2f}A) far exceeds safe limits! Lead melting hazard!")
    RESISTOR_OVERTEMP = ("overtemp", _E, True, "Resistor temperature ({temperature:.1f}°C) exceeds maximum ({max_temperature}°C)")

    # --- Capacitor ---
    CAPACITOR_OVERVOLTAGE = ("overvoltage", _E, True, "Capacitor overvoltage: {voltage:.1f}V exceeds maximum {max_voltage}V")
    CAPACITOR_REVERSE = ("reverse", _W, False, "Capacitor reverse polarity ({voltage:.1f}V) - may damage polarized capacitor")

    # --- Inductor ---
    INDUCTOR_SATURATION = ("saturation", _E, True, "Inductor core saturation: current driven past the {max_current}A limit")
    INDUCTOR_OVERPOWER = ("overpower", _W, False, "Inductor high power dissipation ({power:.2f}W) may cause overheating")

    # --- Diode ---
    DIODE_OVERCURRENT = ("overcurrent", _E, True, "Diode overcurrent: {current:.2f}A exceeds maximum {max_current}A")
    DIODE_BREAKDOWN = ("breakdown", _W, False, "Diode reverse breakdown at {voltage:.1f}V")
    DIODE_OVERPOWER = ("overpower", _W, False, "Diode power dissipation ({power:.2f}W) may cause overheating")

    # --- LED ---
    LED_OVERCURRENT = ("overcurrent", _E, True, "LED overcurrent: {current_ma:.1f}mA exceeds maximum {max_current_ma:.1f}mA")
    LED_REVERSE = ("reverse", _W, False, "LED reverse voltage ({voltage:.1f}V) may damage component")

    # --- Fuse / Lamp ---
    FUSE_BLOWN = ("blown", _E, True, "Fuse blown! Overcurrent protection activated (rated {rating}A)")
    LAMP_BROKEN = ("broken", _E, True, "Lamp burned out! (Exceeded {max_power:.1f}W)")

    # --- Potentiometer ---
    POTENTIOMETER_CRITICAL_OVERPOWER = ("critical-overpower", _C, True, "DANGER! Potentiometer power ({power:.2f}W) far exceeds safe limits!")
    POTENTIOMETER_OVERPOWER = ("overpower", _W, False, "Potentiometer power ({power:.2f}W) exceeds rating ({max_power}W)")

    # --- Switch ---
    SWITCH_OVERCURRENT = ("overcurrent", _C, True, "Switch current ({current:.2f}A) exceeds rating ({max_current}A)!")

    # --- Battery ---
    BATTERY_DEPLETED = ("depleted", _E, True, "Battery depleted ({charge_percent:.1f}% remaining)")
    BATTERY_OVERCURRENT = ("overcurrent", _C, True, "DANGER! Battery overcurrent ({current:.2f}A)! Risk of explosion!")

    # --- Voltage Source ---
    SOURCE_OVERLOADED = ("overloaded", _E, True, "Voltage source overloaded: {current:.2f}A exceeds limit {max_current:.2f}A")
    SOURCE_OVERPOWER = ("overpower", _E, True, "Voltage source overpower: {power:.2f}W exceeds limit {max_power:.2f}W")
    SOURCE_SHORT = ("short", _C, True, "Short circuit detected on voltage source!")

    # --- Network ---
    SOLVER_FAILURE = ("solver-failure", _E, True, "Simulation failed: {reason}")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def severity(self) -> FaultSeverity:
        return self.value[1]

    @property
    def stops_simulation(self) -> bool:
        return self.value[2]

    @property
    def template(self) -> str:
        return self.value[3]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"

    def report(self, owner_id: str, component_ids: Sequence[str] = (), sim_time: float = 0.0, **kwargs) -> Fault:
        """
        Builds the Fault for this code. The fault id is "<owner_id>-<code>", so
        the same condition on the same component always yields the same id.
        """
        return Fault(
            id=f"{owner_id}-{self.code}",
            code=self.code,
            severity=self.severity,
            message=self.format_message(**kwargs),
            component_ids=tuple(component_ids),
            stop_simulation=self.stops_simulation,
            sim_time=sim_time,
        )
