"""Transaction dispatch helpers."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from web3.contract import Contract
from web3.contract.contract import ContractFunction

from .connections import Web3Connections
from .exceptions import TransactionError
from .types import TxResult
from .utils import serialise_receipt

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """Submit signed transactions and wait for their inclusion."""

    def __init__(self, connections: Web3Connections, *, receipt_timeout: float) -> None:
        self._connections = connections
        self._receipt_timeout = receipt_timeout

    def send(
        self,
        contract_function: ContractFunction,
        *,
        action: str,
        context: Mapping[str, Any] | None = None,
    ) -> TxResult:
        """Send ``contract_function`` from the signer and wait for the receipt."""

        self._connections.ensure_connected()
        logger.info("Dispatching %s via %s", action, contract_function.fn_name)

        try:
            tx_hash = contract_function.transact({"from": self._connections.address})
        except Exception as exc:
            raise TransactionError(
                f"Failed to submit transaction for {action}",
                action=action,
                details={"context": dict(context or {}), "error": str(exc)},
            ) from exc

        return self._await_receipt(tx_hash, action)

    def deploy(
        self,
        factory: type[Contract],
        args: Sequence[Any],
        *,
        action: str,
    ) -> TxResult:
        """Publish a new contract instance and return its address in the result."""

        self._connections.ensure_connected()
        logger.info("Dispatching %s", action)

        try:
            tx_hash = factory.constructor(*args).transact({"from": self._connections.address})
        except Exception as exc:
            raise TransactionError(
                f"Failed to submit deployment for {action}",
                action=action,
                details={"args": list(args), "error": str(exc)},
            ) from exc

        result = self._await_receipt(tx_hash, action)
        if not result.contract_address:
            raise TransactionError(
                f"Deployment receipt for {action} has no contract address",
                action=action,
                tx_hash=result.tx_hash,
            )
        return result

    def _await_receipt(self, tx_hash: Any, action: str) -> TxResult:
        tx_hex = tx_hash.to_0x_hex()
        logger.info("Transaction sent for action=%s hash=%s", action, tx_hex)

        web3 = self._connections.web3
        try:
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        except Exception as exc:
            raise TransactionError(
                f"Timed out waiting for {action} receipt",
                action=action,
                tx_hash=tx_hex,
                details={"error": str(exc)},
            ) from exc

        serialised = serialise_receipt(receipt)
        block_number = serialised.get("blockNumber")
        if serialised.get("status", 0) != 1:
            raise TransactionError(
                f"Transaction for {action} reverted",
                action=action,
                tx_hash=tx_hex,
                details={"block_number": block_number},
            )

        logger.info(
            "Transaction confirmed for action=%s hash=%s block=%s",
            action,
            tx_hex,
            block_number,
        )
        return TxResult(
            tx_hash=tx_hex,
            action=action,
            block_number=block_number,
            gas_used=serialised.get("gasUsed"),
            contract_address=serialised.get("contractAddress"),
            receipt=serialised,
        )
