"""
===========================================================
errors.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Exception types raised by the host-vector simulation core.

        - DomainError: invalid parameter set or initial state
                       (e.g. N_h + m == 0 in the incidence term)
        - ShapeError: malformed time grid or series handed to the
                      cumulative estimator
        - DivergenceError: non-finite state, solver failure or the
                           evaluation ceiling reached during integration

Notes:
    - DomainError and ShapeError are also ValueErrors so callers that
      already catch ValueError keep working.
-----------------------------------------------------------
License: MIT
===========================================================
"""


class VectorSweepError(Exception):
    """Base class for every error raised by vectorsweep"""


class DomainError(VectorSweepError, ValueError):
    """Parameter set or state outside the model's domain"""


class ShapeError(VectorSweepError, ValueError):
    """Series of the wrong length or ordering"""


class DivergenceError(VectorSweepError, ArithmeticError):
    """Integration produced a non-finite state or failed to terminate"""
