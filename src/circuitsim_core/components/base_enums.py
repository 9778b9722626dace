# src/circuitsim_core/components/base_enums.py
from enum import Enum, auto


class ComponentKind(Enum):
    """
    The closed set of component kinds the core can simulate. Every member must
    have exactly one model registered in MODEL_REGISTRY; this is checked when
    the components package is imported.
    """
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    DIODE = "diode"
    LED = "led"
    FUSE = "fuse"
    LAMP = "lamp"
    POTENTIOMETER = "potentiometer"
    SWITCH = "switch"
    BATTERY = "battery"
    VOLTAGE_SOURCE = "voltage_source"
    GROUND = "ground"

    def __str__(self):
        return self.value


class StampType(Enum):
    """
    Defines the two ways a component can contribute to the linear system,
    queried by the MnaAssembler.
    """
    CONDUCTANCE = auto()  # Two-terminal resistive element, 1/R between its nodes.
    BRANCH = auto()       # Ideal voltage constraint with an auxiliary current unknown.


class WaveformType(Enum):
    """Output shapes of the voltage source's waveform generator."""
    DC = "dc"
    SINE = "sine"
    SQUARE = "square"
    PULSE = "pulse"
    TRIANGLE = "triangle"

    def __str__(self):
        return self.value
