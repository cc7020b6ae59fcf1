"""Shared type definitions for pool record models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from stablequote.constants import MAX_AMOUNT, MAX_PRECISION


def validate_amount(value: Any) -> int:
    """Validate an asset amount given as int or decimal integer string.

    Args:
        value: Value to validate

    Returns:
        The amount as int

    Raises:
        ValueError: If value is not a non-negative integer within 64-bit range
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if value > MAX_AMOUNT:
        raise ValueError(f"Amount overflow: {value} > 2^63-1")
    return value


# Non-negative 64-bit asset amount, accepted as int or decimal string
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    Field(description="Asset amount in native precision"),
]

# Symbol code: 1-7 uppercase letters
SymbolCode = Annotated[str, Field(pattern=r"^[A-Z]{1,7}$")]

# Native decimal precision
Precision = Annotated[int, Field(ge=0, le=MAX_PRECISION)]
