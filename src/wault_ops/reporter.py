"""Signer account report."""

from __future__ import annotations

from collections.abc import Callable

from .client import VaultOpsClient
from .types import AccountReport
from .utils import to_ether

Emit = Callable[[str], None]


def report_account(client: VaultOpsClient, emit: Emit = print) -> AccountReport:
    """Print the signer address, its balance (raw and decimal) and the block height."""
    address = client.address
    emit(f"Account: {address}")

    balance = client.get_balance()
    emit(f"Account balance(wei): {balance}")
    emit(f"Account balance(ether): {to_ether(balance)}")

    block_number = client.block_number()
    emit(f"Block number: {block_number}")

    return AccountReport(address=address, balance=balance, block_number=block_number)
