"""Shared fakes standing in for the RPC-backed client and contracts."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from wault_ops.artifacts import ContractArtifact
from wault_ops.config import NetworkConfig
from wault_ops.connections import to_checksum
from wault_ops.constants import Network
from wault_ops.contracts import StrategyContract, TokenContract, VaultContract
from wault_ops.types import TxResult

SIGNER = "0x9999999999999999999999999999999999999999"
TOKEN = "0x1111111111111111111111111111111111111111"
VAULT = "0x2222222222222222222222222222222222222222"
STRATEGY = "0x3333333333333333333333333333333333333333"
REWARD_TOKEN = "0x4444444444444444444444444444444444444444"
NEW_VAULT = "0x5555555555555555555555555555555555555555"
NEW_STRATEGY = "0x6666666666666666666666666666666666666666"
HOLDER = "0x7777777777777777777777777777777777777777"

ONE = 10**18


class FakeVault(VaultContract):
    def __init__(self, address: str, log: list[str], state: dict[str, int] | None = None) -> None:
        self._address = address
        self.log = log
        self.state = state or {}
        self.strategy: str | None = None
        self.reward_factors: tuple[int, int, int] | None = None
        self.reward_mode: bool | None = None

    @property
    def address(self) -> str:
        return self._address

    def _tx(self, action: str) -> TxResult:
        self.log.append(action)
        return TxResult(tx_hash=f"0x{len(self.log):064x}", action=action, block_number=1)

    def set_strategy(self, strategy: str) -> TxResult:
        self.strategy = strategy
        return self._tx("set_strategy")

    def set_reward_factors(self, reward_per_block: int, start_block: int, end_block: int) -> TxResult:
        self.reward_factors = (reward_per_block, start_block, end_block)
        return self._tx("set_reward_factors")

    def set_reward_mode(self, enabled: bool) -> TxResult:
        self.reward_mode = enabled
        return self._tx("set_reward_mode")

    def _read(self, name: str) -> int:
        self.log.append(name)
        return self.state.get(name, 0)

    def balance(self) -> int:
        return self._read("balance")

    def balance_of(self, account: str) -> int:
        self.log.append(f"balanceOf:{account}")
        return self.state.get("balanceOf", 0)

    def total_supply(self) -> int:
        return self._read("totalSupply")

    def price_per_full_share(self) -> int:
        return self._read("getPricePerFullShare")

    def claimable(self, account: str) -> int:
        self.log.append(f"claimable:{account}")
        return self.state.get("claimable", 0)

    def reward_per_block(self) -> int:
        return self._read("waultRewardPerBlock")

    def last_reward_block(self) -> int:
        return self._read("lastRewardBlock")

    def acc_reward_per_share(self) -> int:
        return self._read("accWaultPerShare")


class FakeStrategy(StrategyContract):
    def __init__(self, address: str, log: list[str], balance: int = 0) -> None:
        self._address = address
        self.log = log
        self._balance = balance

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self) -> int:
        self.log.append("strategy.balanceOf")
        return self._balance


class FakeToken(TokenContract):
    def __init__(self, address: str, log: list[str], balances: dict[str, int]) -> None:
        self._address = address
        self.log = log
        self._balances = balances

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self, account: str) -> int:
        self.log.append(f"token:{self._address}.balanceOf:{account}")
        return self._balances.get(account, 0)


class FakeClient:
    """In-memory replacement for ``VaultOpsClient``."""

    def __init__(
        self,
        network: NetworkConfig,
        *,
        balances: Iterable[int] = (10 * ONE, 9 * ONE),
        block: int = 1_000,
        vault_state: dict[str, int] | None = None,
        strategy_balance: int = 0,
        token_balances: dict[str, dict[str, int]] | None = None,
    ) -> None:
        self.network = network
        self.log: list[str] = []
        self._balances = list(balances)
        self._block = block
        self._vault_state = vault_state or {}
        self._strategy_balance = strategy_balance
        self._token_balances = token_balances or {}
        self.deployed: list[tuple[str, list[str]]] = []
        self.vaults: dict[str, FakeVault] = {}

    @property
    def address(self) -> str:
        return SIGNER

    def get_balance(self, address: str | None = None) -> int:
        self.log.append("get_balance")
        if len(self._balances) > 1:
            return self._balances.pop(0)
        return self._balances[0]

    def block_number(self) -> int:
        self.log.append("block_number")
        return self._block

    def vault(self, address: str | None) -> FakeVault:
        checksum = to_checksum(address, field="vault_address")
        if checksum not in self.vaults:
            self.vaults[checksum] = FakeVault(checksum, self.log, self._vault_state)
        return self.vaults[checksum]

    def strategy(self, address: str | None) -> FakeStrategy:
        checksum = to_checksum(address, field="strategy_address")
        return FakeStrategy(checksum, self.log, self._strategy_balance)

    def token(self, address: str | None, *, name: str = "token_address") -> FakeToken:
        checksum = to_checksum(address, field=name)
        return FakeToken(checksum, self.log, self._token_balances.get(checksum, {}))

    def deploy(self, artifact: ContractArtifact, args: list[str]) -> TxResult:
        self.log.append(f"deploy:{artifact.name}")
        self.deployed.append((artifact.name, list(args)))
        address = NEW_VAULT if artifact.name == "WaultBtcbVault" else NEW_STRATEGY
        return TxResult(
            tx_hash=f"0x{len(self.deployed):064x}",
            action=f"deploy_{artifact.name}",
            contract_address=address,
        )


def fake_artifact_loader(artifacts_dir: str, contract_name: str) -> ContractArtifact:
    return ContractArtifact(
        name=contract_name, abi=[], bytecode="0x6000", path=Path(artifacts_dir) / contract_name
    )


@pytest.fixture
def network() -> NetworkConfig:
    return NetworkConfig(
        network=Network.TESTNET,
        rpc_url="https://rpc.test",
        token_address=TOKEN,
        vault_address=VAULT,
        strategy_address=STRATEGY,
        reward_token_address=REWARD_TOKEN,
    )


@pytest.fixture
def lines() -> list[str]:
    return []
