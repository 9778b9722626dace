# src/circuitsim_core/simulation/solver.py
import logging
import warnings

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from ..constants import PIVOT_EPSILON
from .exceptions import SingularSystemError

logger = logging.getLogger(__name__)


def solve_mna_system(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """
    Solves G·x = I by LU factorisation with partial pivoting followed by
    forward and back substitution.

    Args:
        matrix: The dense, square system matrix.
        rhs: The right-hand-side vector.

    Returns:
        The solution vector; empty for a zero-sized system.

    Raises:
        SingularSystemError: A pivot magnitude fell below PIVOT_EPSILON, the
            inputs were not finite, or the solution contains NaN/Inf.
        ValueError: If the matrix is not square or does not match the RHS.
    """
    matrix = np.asarray(matrix, dtype=float)
    rhs = np.asarray(rhs, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"System matrix must be square, got shape {matrix.shape}.")
    if rhs.shape != (matrix.shape[0],):
        raise ValueError(f"RHS vector of shape {rhs.shape} does not match matrix of shape {matrix.shape}.")
    if matrix.shape[0] == 0:
        return np.zeros(0)

    logger.debug(f"Factorizing system matrix ({matrix.shape[0]}x{matrix.shape[1]})...")
    try:
        with warnings.catch_warnings():
            # Exactly-zero pivots are reported below with more context.
            warnings.simplefilter("ignore", LinAlgWarning)
            lu, piv = lu_factor(matrix)
    except ValueError as e:
        raise SingularSystemError(details=f"System contains non-finite entries: {e}") from e

    pivots = np.abs(np.diag(lu))
    weak = np.flatnonzero(~(pivots >= PIVOT_EPSILON))
    if weak.size:
        index = int(weak[0])
        logger.debug(f"Pivot {index} has magnitude {pivots[index]:.3e}, below {PIVOT_EPSILON:.1e}.")
        raise SingularSystemError(
            details=f"pivot magnitude {pivots[index]:.3e} is below {PIVOT_EPSILON:.1e}",
            pivot_index=index,
        )

    solution = lu_solve((lu, piv), rhs)
    if not np.all(np.isfinite(solution)):
        logger.error("NaN or Inf detected in MNA solution vector.")
        raise SingularSystemError(details="solution contains NaN/Inf values")
    return solution
