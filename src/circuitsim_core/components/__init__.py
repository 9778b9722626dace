# src/circuitsim_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import (
    ComponentModel, MODEL_REGISTRY, SolvedPort, register_model, get_model, check_registry_complete
)
from .base_enums import ComponentKind, StampType, WaveformType
from .exceptions import ComponentError
from .states import (
    STATE_CLASSES, ResistorState, CapacitorState, InductorState, DiodeState, LedState,
    FuseState, LampState, PotentiometerState, SwitchState, BatteryState,
    VoltageSourceState, GroundState,
)
from .waveforms import WaveformConfig, waveform_value
# Import concrete models to trigger registration
from .elements import (
    ResistorModel, CapacitorModel, InductorModel, DiodeModel, LedModel, FuseModel,
    LampModel, PotentiometerModel, SwitchModel, BatteryModel, VoltageSourceModel, GroundModel,
)
from .actions import (
    replace_fuse, repair_lamp, recharge_battery, set_switch, toggle_switch, set_wiper, set_waveform
)

check_registry_complete()
logger.info(f"Available component kinds: {[str(kind) for kind in MODEL_REGISTRY]}")

__all__ = [
    "ComponentModel",
    "MODEL_REGISTRY",
    "SolvedPort",
    "register_model",
    "get_model",
    "check_registry_complete",
    "ComponentKind",
    "StampType",
    "WaveformType",
    "ComponentError",
    "STATE_CLASSES",
    "ResistorState",
    "CapacitorState",
    "InductorState",
    "DiodeState",
    "LedState",
    "FuseState",
    "LampState",
    "PotentiometerState",
    "SwitchState",
    "BatteryState",
    "VoltageSourceState",
    "GroundState",
    "WaveformConfig",
    "waveform_value",
    "ResistorModel",
    "CapacitorModel",
    "InductorModel",
    "DiodeModel",
    "LedModel",
    "FuseModel",
    "LampModel",
    "PotentiometerModel",
    "SwitchModel",
    "BatteryModel",
    "VoltageSourceModel",
    "GroundModel",
    "replace_fuse",
    "repair_lamp",
    "recharge_battery",
    "set_switch",
    "toggle_switch",
    "set_wiper",
    "set_waveform",
]
