# src/circuitsim_core/protection/__init__.py
import logging
logger = logging.getLogger(__name__)

from .faults import Fault, FaultSeverity
from .fault_codes import FaultCode
from .evaluator import (
    ProtectionEvaluator, FaultLedger, is_known, solver_failure_fault, SIMULATION_FAULT_OWNER
)

__all__ = [
    "Fault",
    "FaultSeverity",
    "FaultCode",
    "ProtectionEvaluator",
    "FaultLedger",
    "is_known",
    "solver_failure_fault",
    "SIMULATION_FAULT_OWNER",
]
