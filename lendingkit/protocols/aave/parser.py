"""Pure fixed-point and formatting helpers for Aave data — no I/O."""
from __future__ import annotations

import re
from typing import Sequence

from ...constants import (
    BASE_CURRENCY_DECIMALS,
    HEALTH_FACTOR_DECIMALS,
    PERCENT_DECIMALS,
    USDC_DECIMALS,
)
from ...models import AccountPosition

_AMOUNT_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)$")


class InvalidAmountError(ValueError):
    """Raised when a user-supplied amount cannot be used for a transaction."""


def parse_units(amount: str, decimals: int) -> int:
    """Convert a decimal string to a fixed-point integer, truncating toward zero.

    Examples:
        parse_units("1.5", 6) → 1500000
        parse_units("0.0000019", 6) → 1
    """
    text = amount.strip()
    if not _AMOUNT_RE.match(text):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")

    negative = text.startswith("-")
    whole, _, fraction = text.lstrip("+-").partition(".")
    digits = (whole or "0") + fraction[:decimals].ljust(decimals, "0")
    value = int(digits)
    return -value if negative else value


def parse_amount(amount: str) -> int:
    """Parse a USDC amount for a transaction; must be strictly positive."""
    value = parse_units(amount, USDC_DECIMALS)
    if value <= 0:
        raise InvalidAmountError(
            f"Invalid amount: {amount!r} must be greater than zero"
        )
    return value


def format_units(value: int, decimals: int) -> str:
    """Render a fixed-point integer as a decimal string without trailing zeros."""
    whole, fraction = divmod(abs(value), 10**decimals)
    text = str(whole)
    if decimals:
        fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
        if fraction_text:
            text = f"{text}.{fraction_text}"
    return f"-{text}" if value < 0 else text


def decode_account_data(
    address: str, account_data: Sequence[int], usdc_balance: int
) -> AccountPosition:
    """Build an AccountPosition from ``getUserAccountData`` output and a balance."""
    if len(account_data) != 6:
        raise ValueError(
            f"getUserAccountData returned {len(account_data)} fields, expected 6"
        )
    collateral, debt, available, threshold, ltv, health_factor = account_data
    return AccountPosition(
        address=address,
        total_collateral_base=int(collateral),
        total_debt_base=int(debt),
        available_borrows_base=int(available),
        current_liquidation_threshold=int(threshold),
        ltv=int(ltv),
        health_factor=int(health_factor),
        usdc_balance=int(usdc_balance),
    )


def format_account_summary(position: AccountPosition) -> str:
    """Human-readable account overview handed back to the agent."""
    return (
        f"Your account data:\n"
        f" Total Deposited: {format_units(position.total_collateral_base, BASE_CURRENCY_DECIMALS)} USDC\n"
        f" Total Debt: {format_units(position.total_debt_base, BASE_CURRENCY_DECIMALS)} USDC\n"
        f" Available Borrows: {format_units(position.available_borrows_base, BASE_CURRENCY_DECIMALS)} USDC\n"
        f" Current Liquidation Threshold: {format_units(position.current_liquidation_threshold, PERCENT_DECIMALS)}%\n"
        f" LTV: {format_units(position.ltv, PERCENT_DECIMALS)}%\n"
        f" Health Factor: {format_units(position.health_factor, HEALTH_FACTOR_DECIMALS)}\n"
        f" USDC Balance: {format_units(position.usdc_balance, USDC_DECIMALS)}\n"
        f" User Address: {position.address}"
    )
