"""
Conversion of user-facing token amounts to contract base units.

``fixed_scaler`` reproduces the long-standing behaviour of multiplying every
amount by 10**18, which is only correct for 18-decimal tokens.
``contract_decimals_scaler`` asks the contract for its ``decimals()`` first.
Both share the same call shape, so a client can switch between them without
touching its call sites.
"""
from decimal import Decimal, InvalidOperation
from typing import Callable, Protocol, Union

from .exceptions import AmountError

FIXED_DECIMALS = 18

# 2**256 - 1 has 78 decimal digits
MAX_UINT256_DIGITS = 78

Amount = Union[int, Decimal, str]


def scale_by_decimals(amount: Amount, decimals: int) -> int:
    """
    Scale an amount by ``10 ** decimals``.

    Args:
        amount: Non-negative int, Decimal or decimal string
        decimals: Number of decimals the token uses

    Returns:
        The amount in base units

    Raises:
        AmountError: If the amount is negative, not a number, or has more
            fractional digits than the token supports, or is too large
            to fit a uint256 once scaled
    """
    if isinstance(amount, bool) or isinstance(amount, float):
        raise AmountError(f"Amount must be an int, Decimal or str, got {type(amount).__name__}")
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise AmountError(f"Decimals must be a non-negative int, got {decimals!r}")

    if isinstance(amount, int):
        if amount < 0:
            raise AmountError(f"Amount must be non-negative, got {amount}")
        if amount and (amount.bit_length() > 256 or decimals > MAX_UINT256_DIGITS):
            raise AmountError(f"Amount {amount} scaled by 10**{decimals} is too large for uint256")
        return amount * 10 ** decimals

    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise AmountError(f"Invalid amount {amount!r}") from e
    if not value.is_finite() or value < 0:
        raise AmountError(f"Amount must be a finite non-negative number, got {amount!r}")

    # Exact integer arithmetic; Decimal operations would round to context precision
    _, digit_tuple, exponent = value.as_tuple()
    digits = "".join(str(d) for d in digit_tuple).lstrip("0")
    if not digits:
        return 0
    significant = digits.rstrip("0")
    exponent += len(digits) - len(significant)
    shift = exponent + decimals
    if len(significant) + shift > MAX_UINT256_DIGITS:
        raise AmountError(f"Amount {amount} scaled by 10**{decimals} is too large for uint256")
    if shift < 0:
        raise AmountError(f"Amount {amount} has more than {decimals} decimal places")
    return int(significant) * 10 ** shift


def scale_fixed(amount: Amount) -> int:
    """Scale an amount by the fixed 10**18 factor."""
    return scale_by_decimals(amount, FIXED_DECIMALS)


class AmountScaler(Protocol):
    """Strategy that turns an amount into base units for a given contract."""

    def __call__(self, amount: Amount, fetch_decimals: Callable[[], int]) -> int:
        ...


def fixed_scaler(amount: Amount, fetch_decimals: Callable[[], int]) -> int:
    """Always scale by 10**18; ``fetch_decimals`` is never called."""
    return scale_fixed(amount)


def contract_decimals_scaler(amount: Amount, fetch_decimals: Callable[[], int]) -> int:
    """Scale by the decimals the contract reports."""
    return scale_by_decimals(amount, int(fetch_decimals()))
