"""Unit conversion and accounting helpers."""

import logging
import threading
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from hexbytes import HexBytes

from .constants import ETHER_DECIMALS, WEI_PER_ETHER
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def to_ether(value: int) -> str:
    """Format a raw 18-decimal integer as a decimal string, e.g. ``1500000000000000000 -> "1.5"``."""
    value = int(value)
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), WEI_PER_ETHER)
    fraction_str = f"{fraction:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_str}"


def parse_ether(value: str | Decimal | int) -> int:
    """Parse a decimal amount into its raw 18-decimal integer form."""
    if isinstance(value, float):
        value = str(value)

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Amount is not a decimal number", field="amount", value=value)

    if not amount.is_finite():
        raise ValidationError("Amount must be finite", field="amount", value=value)

    with localcontext() as ctx:
        ctx.prec = max(28, len(amount.as_tuple().digits) + ETHER_DECIMALS + 2)
        scaled = amount.scaleb(ETHER_DECIMALS)

        if scaled != scaled.to_integral_value():
            raise ValidationError(
                f"Amount has more than {ETHER_DECIMALS} decimal places",
                field="amount",
                value=value,
            )

    return int(scaled)


def compute_claimed(balance: int, total_supply: int) -> int:
    """Underlying held above the share supply, floored at zero."""
    return balance - total_supply if balance > total_supply else 0


def compute_earned(balance_of: int, price_per_share: int) -> int:
    """Unrealised earnings of a share balance at the given price per full share."""
    return balance_of * price_per_share // WEI_PER_ETHER - balance_of


def pause(seconds: float, reason: str = "", cancel: threading.Event | None = None) -> bool:
    """Wait up to ``seconds`` without spinning.

    Returns ``True`` when the wait was cut short by ``cancel`` being set.
    """
    if seconds <= 0:
        return False

    logger.info("Wait %s ms... (%s)", int(seconds * 1000), reason)
    event = cancel if cancel is not None else threading.Event()
    return event.wait(seconds)


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).hex()
    return receipt
