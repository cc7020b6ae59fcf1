"""Pricing constants for StableSwap quoting.

Centralizes the numeric conventions shared by the solvers, the fee model
and the fixed-point converter.
"""

# Two-asset pools only
N_COINS = 2

# Newton-Raphson iteration cap for both the invariant and the output solver.
# The pools accept an approximate fixed point after this many steps; it is
# not derived from the reserves.
MAX_ITERATIONS = 10

# Amplification coefficients are carried as A * AMP_PRECISION so that a
# ramp between two whole coefficients moves in sub-unit steps.
AMP_PRECISION = 100

# Fee rates are integer fractions of FEE_DENOMINATOR (basis points)
FEE_DENOMINATOR = 10_000

# Amounts (native or normalized) are signed 64-bit asset quantities
MAX_AMOUNT = 2**63 - 1

# Widest native precision an asset may declare
MAX_PRECISION = 18
