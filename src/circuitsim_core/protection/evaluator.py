# src/circuitsim_core/protection/evaluator.py
# Required for forward references in type hints
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from ..components.base import get_model
from ..errors import DiagnosableError
from .fault_codes import FaultCode
from .faults import Fault

if TYPE_CHECKING:
    from ..data_structures import Component

logger = logging.getLogger(__name__)

#: Owner prefix of faults that concern the whole network rather than one component.
SIMULATION_FAULT_OWNER = "simulation"


def is_known(fault: Fault, known: Iterable[Fault]) -> bool:
    """A fault is already known if a known fault has the same id or the same message."""
    return any(fault.id == other.id or fault.message == other.message for other in known)


def solver_failure_fault(error: DiagnosableError, sim_time: float) -> Fault:
    """Builds the single halting fault that reports a failed solve."""
    return FaultCode.SOLVER_FAILURE.report(
        SIMULATION_FAULT_OWNER, sim_time=sim_time, reason=error.short_message(),
    )


class ProtectionEvaluator:
    """
    Collects the fault reports of every component after its state has been
    updated, and separates them into new and already-known faults.

    This is a stateless service; the memory of known faults lives in a
    FaultLedger owned by the run.
    """
    def __init__(self, components: Sequence[Component]):
        self.components = components

    def evaluate(self, sim_time: float) -> List[Fault]:
        """Returns every fault the components currently exhibit, in component order."""
        faults: List[Fault] = []
        for comp in self.components:
            faults.extend(get_model(comp.kind).check_faults(comp, sim_time))
        return faults

    @staticmethod
    def partition(faults: Sequence[Fault], known: Iterable[Fault]) -> Tuple[List[Fault], List[Fault]]:
        """Splits `faults` into (new, repeated) with respect to `known`."""
        known = list(known)
        new: List[Fault] = []
        repeated: List[Fault] = []
        for fault in faults:
            if is_known(fault, known):
                repeated.append(fault)
            else:
                new.append(fault)
                known.append(fault)
        return new, repeated

    @staticmethod
    def requires_halt(faults: Iterable[Fault]) -> bool:
        return any(fault.stop_simulation for fault in faults)


class FaultLedger:
    """
    The faults a run has reported so far. Faults stay in the ledger until
    `clear()` is called, whether or not their condition persists.
    """
    def __init__(self):
        self._faults: List[Fault] = []

    @property
    def faults(self) -> Tuple[Fault, ...]:
        return tuple(self._faults)

    def record(self, faults: Sequence[Fault]) -> List[Fault]:
        """Adds the faults not yet known and returns them."""
        new, _ = ProtectionEvaluator.partition(faults, self._faults)
        for fault in new:
            logger.warning(f"New fault: {fault}")
        self._faults.extend(new)
        return new

    def clear(self) -> None:
        if self._faults:
            logger.info(f"Clearing {len(self._faults)} recorded fault(s).")
        self._faults.clear()

    def __len__(self) -> int:
        return len(self._faults)

    def __contains__(self, fault_id: str) -> bool:
        return any(fault.id == fault_id for fault in self._faults)
