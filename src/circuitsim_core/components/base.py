# src/circuitsim_core/components/base.py
# Required for forward references in type hints
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Dict, List, Tuple, Type

from ..errors import FrameworkLogicError
from .base_enums import ComponentKind, StampType
from .states import STATE_CLASSES

if TYPE_CHECKING:
    from ..data_structures import Component
    from ..protection.faults import Fault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolvedPort:
    """
    What the solve says about one component: the voltages of the nodes its two
    terminals sit on, and the current through it.

    For conductance-stamped kinds `current` is (v_pos - v_neg) / R at the
    resistance that was stamped; for branch-stamped kinds it is the branch
    current delivered out of the positive terminal.
    """
    v_pos: float
    v_neg: float
    current: float

    @property
    def drop(self) -> float:
        return self.v_pos - self.v_neg


class ComponentModel(ABC):
    """
    The abstract base class for the per-kind component models.

    A model is stateless: all persistent physics live in the component's state
    record. Each model answers three questions for its kind:

    - how it stamps into the linear system (`stamp_type` plus `resistance` or
      `branch_voltage`/`branch_resistance`),
    - how its state advances from the solved values (`update`),
    - which fault conditions its state currently exhibits (`check_faults`).
    """
    kind: ClassVar[ComponentKind]
    terminal_names: ClassVar[Tuple[str, str]] = ("terminal1", "terminal2")
    stamp_type: ClassVar[StampType] = StampType.CONDUCTANCE

    @classmethod
    def validate(cls, component: Component) -> None:
        """Raises ComponentError if the state's parameters cannot be simulated."""

    @classmethod
    def resistance(cls, state) -> float:
        """The resistance stamped between the two terminals this tick."""
        raise FrameworkLogicError(f"{cls.__name__} does not provide a conductance stamp.")

    @classmethod
    def branch_voltage(cls, state) -> float:
        """The voltage enforced across the terminals by the branch constraint."""
        raise FrameworkLogicError(f"{cls.__name__} does not provide a branch stamp.")

    @classmethod
    def branch_resistance(cls, state) -> float:
        """Series resistance folded into the branch constraint row."""
        return 0.0

    @classmethod
    @abstractmethod
    def update(cls, component: Component, port: SolvedPort, delta_time: float, sim_time: float) -> None:
        """
        Advances the component's state from the solved values.

        Args:
            component: The component whose state record is mutated in place.
            port: The solved node voltages and current for this component.
            delta_time: The tick length in seconds.
            sim_time: Simulation time at the end of this tick.
        """

    @classmethod
    @abstractmethod
    def check_faults(cls, component: Component, sim_time: float) -> List[Fault]:
        """Returns the faults the component's current state exhibits."""

    @staticmethod
    def write_terminals(component: Component, port: SolvedPort, current: float) -> None:
        """Records solved voltages on both terminals; +I on the first, -I on the second."""
        positive, negative = component.terminals
        positive.voltage = port.v_pos
        negative.voltage = port.v_neg
        positive.current = current
        negative.current = -current

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind})"


# --- Global Model Registry and Decorator ---

MODEL_REGISTRY: Dict[ComponentKind, Type[ComponentModel]] = {}


def register_model(kind: ComponentKind):
    """
    A class decorator that registers a model as the single implementation for
    `kind`, after checking that it honours the model contract.
    """
    def decorator(cls: Type[ComponentModel]):
        if not issubclass(cls, ComponentModel):
            raise TypeError(f"Class {cls.__name__} must inherit from ComponentModel.")
        if getattr(cls, "__abstractmethods__", None):
            raise TypeError(
                f"Model class '{cls.__name__}' must implement: {sorted(cls.__abstractmethods__)}."
            )

        names = cls.terminal_names
        if (not isinstance(names, tuple) or len(names) != 2
                or not all(isinstance(n, str) and n for n in names) or names[0] == names[1]):
            raise TypeError(
                f"Model class '{cls.__name__}' violates API contract. "
                f"terminal_names must be a tuple of two distinct, non-empty strings, but is: {names!r}."
            )

        required_hook = {
            StampType.CONDUCTANCE: "resistance",
            StampType.BRANCH: "branch_voltage",
        }.get(cls.stamp_type)
        if required_hook is None:
            raise TypeError(f"Model class '{cls.__name__}' declares an unknown stamp type {cls.stamp_type!r}.")
        if getattr(cls, required_hook).__func__ is getattr(ComponentModel, required_hook).__func__:
            raise TypeError(
                f"Model class '{cls.__name__}' violates API contract. "
                f"{cls.stamp_type.name} models must override {required_hook}()."
            )

        if kind in MODEL_REGISTRY:
            logger.warning(f"Model for kind '{kind}' is being redefined/overwritten.")
        cls.kind = kind
        MODEL_REGISTRY[kind] = cls
        logger.debug(f"Registered model for kind '{kind}' -> {cls.__name__}")
        return cls
    return decorator


def get_model(kind: ComponentKind) -> Type[ComponentModel]:
    """Returns the model registered for `kind`."""
    try:
        return MODEL_REGISTRY[kind]
    except KeyError:
        raise FrameworkLogicError(f"No model is registered for component kind '{kind}'.") from None


def check_registry_complete() -> None:
    """
    Verifies that every ComponentKind has exactly one registered model and a
    state record class, so no kind can reach the solver unmodeled.
    """
    missing_models = [str(k) for k in ComponentKind if k not in MODEL_REGISTRY]
    missing_states = [str(k) for k in ComponentKind if k not in STATE_CLASSES]
    if missing_models or missing_states:
        raise FrameworkLogicError(
            f"Component registry is incomplete. Kinds without a model: {missing_models}; "
            f"kinds without a state record: {missing_states}."
        )
