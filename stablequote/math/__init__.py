"""Mathematical primitives for StableSwap quoting.

- scaling: native <-> working precision conversion
- stable_math: invariant and output-reserve solvers
"""

from stablequote.math.scaling import denormalize, normalize, working_precision
from stablequote.math.stable_math import calc_out_given_in, calculate_invariant, get_output_reserve

__all__ = [
    "calc_out_given_in",
    "calculate_invariant",
    "denormalize",
    "get_output_reserve",
    "normalize",
    "working_precision",
]
