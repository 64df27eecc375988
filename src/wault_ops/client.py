"""Client bundling the connection, dispatcher and contract handle factories."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .abi import ERC20_ABI, STRATEGY_ABI, VAULT_ABI
from .artifacts import ContractArtifact
from .config import ConnectionConfig, NetworkConfig
from .connections import Web3Connections
from .contracts import (
    StrategyContract,
    TokenContract,
    VaultContract,
    Web3Strategy,
    Web3Token,
    Web3Vault,
)
from .exceptions import NetworkError, ValidationError
from .transactions import TransactionDispatcher
from .types import Address, TxResult


class VaultOpsClient:
    """Signer-bound access to one network's vault, strategy and tokens."""

    def __init__(self, network: NetworkConfig, config: ConnectionConfig) -> None:
        self.network = network
        self._connections = Web3Connections(network, config)
        self._dispatcher = TransactionDispatcher(
            self._connections, receipt_timeout=config.receipt_timeout
        )

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    def connect(self) -> None:
        try:
            self._connections.connect()
        except (ValidationError, NetworkError):
            self.disconnect()
            raise
        except Exception as exc:
            self.disconnect()
            raise NetworkError(
                "Failed to initialise RPC connection",
                endpoint=self.network.rpc_url,
                details={"error": str(exc)},
            ) from exc

    def disconnect(self) -> None:
        self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    def __enter__(self) -> VaultOpsClient:
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()

    # ------------------------------------------------------------------
    # Signer and chain state
    # ------------------------------------------------------------------
    @property
    def address(self) -> Address:
        return self._connections.address

    def get_balance(self, address: Address | None = None) -> int:
        return self._connections.get_balance(address)

    def block_number(self) -> int:
        return self._connections.block_number()

    # ------------------------------------------------------------------
    # Contract handles
    # ------------------------------------------------------------------
    def vault(self, address: Address | None) -> VaultContract:
        contract = self._connections.contract(address, VAULT_ABI, name="vault_address")
        return Web3Vault(contract, self._dispatcher)

    def strategy(self, address: Address | None) -> StrategyContract:
        contract = self._connections.contract(address, STRATEGY_ABI, name="strategy_address")
        return Web3Strategy(contract)

    def token(self, address: Address | None, *, name: str = "token_address") -> TokenContract:
        contract = self._connections.contract(address, ERC20_ABI, name=name)
        return Web3Token(contract)

    def deploy(self, artifact: ContractArtifact, args: Sequence[Any]) -> TxResult:
        """Publish ``artifact`` with constructor ``args``."""

        factory = self._connections.contract_factory(artifact.abi, artifact.bytecode)
        return self._dispatcher.deploy(factory, args, action=f"deploy_{artifact.name}")
