# src/circuitsim_core/simulation/execution.py
"""
Provides the public API for driving simulations over time.

`SimulationRun` is the session a user interacts with: it owns the running
flag, the simulation clock, the run-level settings and the ledger of faults
reported so far, and hands each tick to the stateless `SimulationEngine`.
`run_transient` is a one-call convenience wrapper around it.
"""
# Required for forward references in type hints
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..errors import SimulationRunError
from ..protection import Fault, FaultLedger
from .config import SimulationConfig
from .context import TickContext
from .engine import SimulationEngine
from .results import TickResult

if TYPE_CHECKING:
    from ..data_structures import Component, Wire

logger = logging.getLogger(__name__)


class SimulationRun:
    """
    A simulation session over a fixed list of components and wires.

    Stepping a stopped run does nothing and returns None. A tick that reports
    a halting fault stops the run at the end of that tick; it can be started
    again, but recorded faults are only removed by `clear_faults()`.
    """
    def __init__(
        self,
        components: Sequence[Component],
        wires: Sequence[Wire],
        config: Optional[SimulationConfig] = None,
    ):
        self.components = components
        self.wires = wires
        self.config: SimulationConfig = config if config is not None else SimulationConfig()
        self._validate_config(self.config)
        self.running: bool = False
        self.sim_time: float = 0.0
        self.tick_count: int = 0
        self.last_result: Optional[TickResult] = None
        self._ledger = FaultLedger()

    @staticmethod
    def _validate_config(config: SimulationConfig) -> None:
        for name in ("time_step", "speed", "min_time_step"):
            value = getattr(config, name)
            if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
                raise SimulationRunError(f"Simulation setting '{name}' must be a finite, positive number, got {value!r}.")

    @property
    def faults(self) -> Tuple[Fault, ...]:
        """All faults reported since the last `clear_faults()`, oldest first."""
        return self._ledger.faults

    @property
    def time_step(self) -> float:
        return self.config.time_step

    @property
    def speed(self) -> float:
        return self.config.speed

    def set_speed(self, speed: float) -> None:
        config = SimulationConfig(time_step=self.config.time_step, speed=speed,
                                  min_time_step=self.config.min_time_step)
        self._validate_config(config)
        self.config = config

    def start(self) -> None:
        if not self.running:
            logger.info(f"Simulation started at t={self.sim_time:.4f}s.")
        self.running = True

    def stop(self) -> None:
        if self.running:
            logger.info(f"Simulation stopped at t={self.sim_time:.4f}s.")
        self.running = False

    def clear_faults(self) -> None:
        self._ledger.clear()

    def step(self, delta_time: Optional[float] = None) -> Optional[TickResult]:
        """
        Advances the simulation by one tick.

        Args:
            delta_time: Base tick length in seconds; defaults to the configured
                time step. The speed multiplier and the minimum time step are
                applied on top.

        Returns:
            The TickResult, or None if the run is not running.

        Raises:
            SimulationRunError: If `delta_time` is not a finite, positive number.
        """
        if not self.running:
            return None
        if delta_time is not None and not (
            isinstance(delta_time, (int, float)) and math.isfinite(delta_time) and delta_time > 0
        ):
            raise SimulationRunError(f"Time step must be a finite, positive number of seconds, got {delta_time!r}.")

        context = TickContext(
            components=self.components,
            wires=self.wires,
            delta_time=self.config.effective_time_step(delta_time),
            sim_time=self.sim_time,
            known_faults=self._ledger.faults,
        )
        result = SimulationEngine(context).execute_tick()
        self._ledger.record(result.faults)

        for wire in self.wires:
            if wire.id in result.wire_voltages:
                wire.voltage = result.wire_voltages[wire.id]
                wire.current = result.wire_currents[wire.id]

        self.sim_time = result.sim_time
        self.tick_count += 1
        self.last_result = result
        if result.halted:
            logger.info(f"Simulation halted by fault(s) at t={self.sim_time:.4f}s.")
            self.running = False
        return result

    def run(self, steps: int, delta_time: Optional[float] = None) -> List[TickResult]:
        """
        Starts the run and executes up to `steps` ticks, stopping early if a
        tick halts the simulation.
        """
        if steps < 0:
            raise SimulationRunError(f"Number of steps must be non-negative, got {steps}.")
        self.start()
        results: List[TickResult] = []
        for _ in range(steps):
            result = self.step(delta_time)
            if result is None:
                break
            results.append(result)
        return results


def run_transient(
    components: Sequence[Component],
    wires: Sequence[Wire],
    steps: int,
    time_step: Optional[float] = None,
    config: Optional[SimulationConfig] = None,
) -> List[TickResult]:
    """
    Runs a fresh simulation session for `steps` ticks and returns every tick
    result. The run ends early if a fault halts it.

    Args:
        components: The components to simulate; their states are advanced in place.
        wires: The wires joining their terminals.
        steps: Maximum number of ticks.
        time_step: Base tick length in seconds, overriding the config's.
        config: Run settings; defaults to SimulationConfig().
    """
    session = SimulationRun(components, wires, config=config)
    logger.info(f"--- Running transient simulation: {len(components)} component(s), up to {steps} tick(s) ---")
    return session.run(steps, delta_time=time_step)
