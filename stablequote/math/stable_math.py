"""Two-asset StableSwap math.

Core solvers for the StableSwap invariant (Curve-style, with the n^n factor
folded into the amplification term):

    A*n^n * sum(x) + D = A*D*n^n + D^(n+1) / (n^n * prod(x))

Both solvers use Newton-Raphson iteration capped at MAX_ITERATIONS and
accept whatever fixed point they reach by then.

IMPORTANT: All intermediates use SafeInt / SignedInt so width and signedness
are explicit. Only the linear coefficient b of the output solver is signed.
"""

import structlog

from stablequote.constants import AMP_PRECISION, MAX_ITERATIONS, N_COINS
from stablequote.errors import InsufficientLiquidity, ZeroBalanceError
from stablequote.safe_int import S, SignedInt

logger = structlog.get_logger()


def _check_amp(amp: int, amp_precision: int) -> None:
    if amp_precision <= 0:
        raise ValueError(f"amp_precision must be positive, got {amp_precision}")
    if amp < amp_precision:
        raise ValueError(f"Amplification {amp} is below 1 at precision {amp_precision}")


def calculate_invariant(
    amp: int,
    reserve_in: int,
    reserve_out: int,
    amp_precision: int = AMP_PRECISION,
) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = reserve_in + reserve_out
        2. D_P = D^2 / (2*reserve_in) * D / (2*reserve_out)
        3. D = (Ann*S/P + 2*D_P) * D / ((Ann - P)*D/P + 3*D_P)
        4. Stop when D repeats or after MAX_ITERATIONS

    With amp_precision=1 the update is exactly 2D(A*S + D_P) / ((2A-1)D + 3D_P).

    Args:
        amp: Amplification coefficient scaled by amp_precision
        reserve_in: Normalized input-side reserve
        reserve_out: Normalized output-side reserve
        amp_precision: Scale of amp

    Returns:
        The invariant D

    Raises:
        ZeroBalanceError: If either reserve is not positive
        ValueError: If amp is below 1 in coefficient units
        WidthOverflow: If an intermediate exceeds 256 bits
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise ZeroBalanceError(f"Reserves must be positive, got ({reserve_in}, {reserve_out})")
    _check_amp(amp, amp_precision)

    x_in, x_out = S(reserve_in), S(reserve_out)
    precision = S(amp_precision)
    sum_reserves = x_in + x_out
    amp_times_n = S(amp) * S(N_COINS)

    d = sum_reserves
    d_prev = S.zero()
    iterations = 0
    while d != d_prev and iterations < MAX_ITERATIONS:
        iterations += 1
        # D_P = D^(n+1) / (n^n * prod(x)), divided per reserve to keep width down
        d_p = d * d // (S(N_COINS) * x_in) * d // (S(N_COINS) * x_out)
        d_prev = d

        numerator = (amp_times_n * sum_reserves // precision + S(N_COINS) * d_p) * d
        denominator = (amp_times_n - precision) * d // precision + S(N_COINS + 1) * d_p
        d = numerator // denominator

    logger.debug("stable_invariant", invariant=d.value, iterations=iterations)
    return d.value


def get_output_reserve(
    amp: int,
    invariant: int,
    new_reserve_in: int,
    amp_precision: int = AMP_PRECISION,
) -> int:
    """Solve for the output-side reserve that preserves D after a deposit.

    The invariant at a fixed input reserve reduces to the quadratic
    x^2 + b*x = c with

        b = x_in' + D/Ann - D        (signed; negative for any realistic pool)
        c = D^(n+1) / (n^n * x_in' * Ann)

    solved by x = (x^2 + c) / (2x + b), starting from x = D.

    Args:
        amp: Amplification coefficient scaled by amp_precision
        invariant: D from calculate_invariant
        new_reserve_in: Input-side reserve after the deposit (normalized)
        amp_precision: Scale of amp

    Returns:
        The new output-side reserve

    Raises:
        ZeroBalanceError: If new_reserve_in is not positive
        InsufficientLiquidity: If the iteration denominator becomes non-positive
        WidthOverflow: If an intermediate exceeds 256 bits
    """
    if new_reserve_in <= 0:
        raise ZeroBalanceError(f"Input reserve must be positive, got {new_reserve_in}")
    _check_amp(amp, amp_precision)

    d = S(invariant)
    x_in = S(new_reserve_in)
    precision = S(amp_precision)
    amp_times_n = S(amp) * S(N_COINS)

    b = SignedInt(x_in + d * precision // amp_times_n) - d
    c = d * d // (S(N_COINS) * x_in) * d * precision // (S(N_COINS) * amp_times_n)

    x = d
    x_prev = S.zero()
    iterations = 0
    while x != x_prev and iterations < MAX_ITERATIONS:
        iterations += 1
        x_prev = x
        denominator = SignedInt(S(2) * x) + b
        if denominator <= 0:
            raise InsufficientLiquidity(
                f"Output solver denominator became non-positive: {denominator.value}"
            )
        x = ((x * x + c) // denominator).to_unsigned()

    logger.debug("stable_output_reserve", reserve=x.value, b=b.value, c=c.value, iterations=iterations)
    return x.value


def calc_out_given_in(
    amp: int,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    amp_precision: int = AMP_PRECISION,
) -> int:
    """Calculate the raw (pre-fee) output for an exact input.

    Algorithm:
        1. D = calculate_invariant(reserve_in, reserve_out)
        2. x = get_output_reserve(D, reserve_in + amount_in)
        3. Return reserve_out - x

    All amounts are normalized to the same working precision.

    Raises:
        InsufficientLiquidity: If the output is not positive
        ZeroBalanceError: If a reserve is zero
    """
    invariant = calculate_invariant(amp, reserve_in, reserve_out, amp_precision)
    new_reserve_out = get_output_reserve(amp, invariant, reserve_in + amount_in, amp_precision)

    amount_out = reserve_out - new_reserve_out
    if amount_out <= 0:
        raise InsufficientLiquidity(
            f"Non-positive output: reserve_out={reserve_out}, new_reserve_out={new_reserve_out}"
        )
    return amount_out
