"""Tests for the StableSwap invariant and output solvers.

Reserves are normalized amounts; ONE_MILLION_6 is 1,000,000 units at
6 decimals.
"""

from math import isqrt

import pytest

from stablequote.constants import AMP_PRECISION
from stablequote.errors import InsufficientLiquidity, ZeroBalanceError
from stablequote.math import calc_out_given_in, calculate_invariant, get_output_reserve
from stablequote.safe_int import WidthOverflow
from tests.helpers import ONE_MILLION_6, ONE_THOUSAND_6


def reference_amount_out(a: int, reserve_in: int, reserve_out: int, amount_in: int) -> int:
    """Unscaled two-asset recurrence with plain ints, for parity checks."""
    total = reserve_in + reserve_out
    d, d_prev, remaining = total, 0, 10
    while d != d_prev and remaining:
        remaining -= 1
        prod1 = d * d // (reserve_in * 2) * d // (reserve_out * 2)
        d_prev = d
        d = 2 * d * (a * total + prod1) // ((2 * a - 1) * d + 3 * prod1)

    new_in = reserve_in + amount_in
    b = new_in + d // (a * 2) - d
    c = d * d // (new_in * 2) * d // (a * 4)
    x, x_prev, remaining = d, 0, 10
    while x != x_prev and remaining:
        remaining -= 1
        x_prev = x
        x = (x * x + c) // (2 * x + b)
    return reserve_out - x


def amp(a: int) -> int:
    """Coefficient in AMP_PRECISION units."""
    return a * AMP_PRECISION


class TestCalculateInvariant:
    """Tests for the invariant solver."""

    def test_balanced_pool_invariant_is_sum(self) -> None:
        """For equal reserves D is exactly the sum of reserves."""
        assert calculate_invariant(amp(100), ONE_MILLION_6, ONE_MILLION_6) == 2 * ONE_MILLION_6

    @pytest.mark.parametrize("a", [1, 10, 100, 5000])
    def test_balanced_invariant_independent_of_amp(self, a: int) -> None:
        assert calculate_invariant(amp(a), ONE_MILLION_6, ONE_MILLION_6) == 2 * ONE_MILLION_6

    @pytest.mark.parametrize("a", [1, 100, 5000])
    def test_unbalanced_invariant_between_product_and_sum(self, a: int) -> None:
        """D lies between the constant-product and constant-sum invariants."""
        x, y = 300_000 * 10**6, 700_000 * 10**6
        d = calculate_invariant(amp(a), x, y)
        assert 2 * isqrt(x * y) <= d <= x + y

    def test_higher_amp_moves_invariant_toward_sum(self) -> None:
        x, y = 300_000 * 10**6, 700_000 * 10**6
        assert calculate_invariant(amp(1), x, y) < calculate_invariant(amp(1000), x, y)

    def test_invariant_is_symmetric(self) -> None:
        x, y = 250_000 * 10**6, 900_000 * 10**6
        assert abs(calculate_invariant(amp(50), x, y) - calculate_invariant(amp(50), y, x)) <= 2

    def test_zero_reserve_raises(self) -> None:
        with pytest.raises(ZeroBalanceError):
            calculate_invariant(amp(100), 0, ONE_MILLION_6)
        with pytest.raises(ZeroBalanceError):
            calculate_invariant(amp(100), ONE_MILLION_6, 0)

    def test_amp_below_one_raises(self) -> None:
        with pytest.raises(ValueError):
            calculate_invariant(AMP_PRECISION - 1, ONE_MILLION_6, ONE_MILLION_6)

    def test_wide_intermediate_overflow_raises(self) -> None:
        """Intermediates past 256 bits raise instead of wrapping."""
        with pytest.raises(WidthOverflow):
            calculate_invariant(10**8, 2**120, 2**120)


class TestGetOutputReserve:
    """Tests for the output-reserve solver."""

    def test_no_deposit_keeps_output_reserve(self) -> None:
        """Without a deposit the solver lands on the current output reserve."""
        d = calculate_invariant(amp(100), ONE_MILLION_6, ONE_MILLION_6)
        assert get_output_reserve(amp(100), d, ONE_MILLION_6) == ONE_MILLION_6

    def test_deposit_lowers_output_reserve(self) -> None:
        d = calculate_invariant(amp(100), ONE_MILLION_6, ONE_MILLION_6)
        new_out = get_output_reserve(amp(100), d, ONE_MILLION_6 + ONE_THOUSAND_6)
        assert ONE_MILLION_6 - ONE_THOUSAND_6 < new_out < ONE_MILLION_6

    def test_zero_input_reserve_raises(self) -> None:
        with pytest.raises(ZeroBalanceError):
            get_output_reserve(amp(100), 2 * ONE_MILLION_6, 0)


class TestCalcOutGivenIn:
    """Tests for the combined exact-input calculation."""

    def test_balanced_pool_near_one_to_one(self) -> None:
        """1,000 in against a deep balanced pool returns just under 1,000."""
        out = calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, ONE_THOUSAND_6)
        assert 999 * 10**6 < out < ONE_THOUSAND_6

    @pytest.mark.parametrize(
        "a,reserve_in,reserve_out,amount_in",
        [
            (100, ONE_MILLION_6, ONE_MILLION_6, ONE_THOUSAND_6),
            (50, 300_000 * 10**6, 700_000 * 10**6, 5_000 * 10**6),
            (200, 700_000 * 10**6, 300_000 * 10**6, 12_345_678),
            (1, 10**10, 2 * 10**10, 10**8),
        ],
    )
    def test_unit_precision_matches_unscaled_recurrence(
        self, a: int, reserve_in: int, reserve_out: int, amount_in: int
    ) -> None:
        """With amp_precision=1 the solvers reproduce the unscaled recurrence exactly."""
        expected = reference_amount_out(a, reserve_in, reserve_out, amount_in)
        assert calc_out_given_in(a, reserve_in, reserve_out, amount_in, amp_precision=1) == expected

    def test_scaled_and_unscaled_amp_agree_closely(self) -> None:
        """AMP_PRECISION only refines rounding; the price barely moves."""
        scaled = calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, ONE_THOUSAND_6)
        unscaled = calc_out_given_in(100, ONE_MILLION_6, ONE_MILLION_6, ONE_THOUSAND_6, amp_precision=1)
        assert abs(scaled - unscaled) <= 10

    def test_monotonic_in_amount(self) -> None:
        amounts = [10**8, 10**9, 10**10, 10**11, 5 * 10**11]
        outs = [calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, a) for a in amounts]
        assert outs == sorted(outs)
        assert all(out < a for out, a in zip(outs, amounts, strict=True))

    def test_high_amp_approaches_constant_sum(self) -> None:
        """Raising A moves the output toward amount_in."""
        outs = [
            calc_out_given_in(amp(a), ONE_MILLION_6, ONE_MILLION_6, 10 * ONE_THOUSAND_6)
            for a in (1, 10, 100, 10_000)
        ]
        assert outs == sorted(outs)
        assert len(set(outs)) == len(outs)
        assert 10 * ONE_THOUSAND_6 - outs[-1] < 10 * ONE_THOUSAND_6 - outs[0]
        assert outs[-1] < 10 * ONE_THOUSAND_6

    def test_low_amp_approaches_constant_product(self) -> None:
        """At A=1 the output sits above, and closest to, constant-product pricing."""
        amount_in = 10 * ONE_THOUSAND_6
        constant_product = ONE_MILLION_6 * amount_in // (ONE_MILLION_6 + amount_in)
        out_low = calc_out_given_in(amp(1), ONE_MILLION_6, ONE_MILLION_6, amount_in)
        out_high = calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, amount_in)
        assert constant_product < out_low < out_high
        assert out_low - constant_product < out_high - constant_product

    def test_large_input_never_drains_pool(self) -> None:
        out = calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, 1000 * ONE_MILLION_6)
        assert 0 < out < ONE_MILLION_6

    def test_zero_input_is_insufficient_liquidity(self) -> None:
        """No deposit yields no output, which is rejected."""
        with pytest.raises(InsufficientLiquidity):
            calc_out_given_in(amp(100), ONE_MILLION_6, ONE_MILLION_6, 0)
