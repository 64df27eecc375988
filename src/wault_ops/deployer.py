"""Deployment and wiring of the vault/strategy pair."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .artifacts import ContractArtifact, load_artifact
from .client import VaultOpsClient
from .config import DeployOptions, NetworkConfig
from .connections import to_checksum
from .constants import STRATEGY_CONTRACT_NAME, VAULT_CONTRACT_NAME
from .contracts import StrategyContract, VaultContract
from .exceptions import WaultOpsError
from .types import Address, DeployResult, TxResult
from .utils import parse_ether, pause, to_ether

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]
ArtifactLoader = Callable[[str, str], ContractArtifact]


def reward_window(current_block: int, duration_blocks: int) -> tuple[int, int]:
    """Reward schedule starting at ``current_block`` and lasting ``duration_blocks``."""
    return current_block, current_block + duration_blocks


class Deployer:
    """Deploy or attach the vault and strategy, link them and set the reward schedule.

    Every step is a separate transaction awaited to inclusion. Nothing is rolled
    back on failure; running again publishes fresh contracts.
    Setting ``cancel`` stops the run at the next step boundary.
    """

    def __init__(
        self,
        client: VaultOpsClient,
        network: NetworkConfig,
        options: DeployOptions,
        *,
        emit: Emit = print,
        artifact_loader: ArtifactLoader = load_artifact,
        cancel: threading.Event | None = None,
    ) -> None:
        self._client = client
        self._network = network
        self._options = options
        self._emit = emit
        self._artifact_loader = artifact_loader
        self._cancel = cancel
        self._transactions: list[TxResult] = []

    @property
    def transactions(self) -> list[TxResult]:
        return list(self._transactions)

    # ------------------------------------------------------------------
    # Individual steps
    # ------------------------------------------------------------------
    def deploy_vault(self, token_address: Address | None) -> VaultContract:
        token = to_checksum(token_address, field="token_address")
        result = self._deploy(VAULT_CONTRACT_NAME, token)
        return self._client.vault(result.contract_address)

    def deploy_strategy(self, vault_address: Address) -> StrategyContract:
        vault = to_checksum(vault_address, field="vault_address")
        result = self._deploy(STRATEGY_CONTRACT_NAME, vault)
        return self._client.strategy(result.contract_address)

    def attach_vault(self, vault_address: Address | None) -> VaultContract:
        return self._client.vault(vault_address)

    def attach_strategy(self, strategy_address: Address | None) -> StrategyContract:
        return self._client.strategy(strategy_address)

    def wire_up(self, vault: VaultContract, strategy: StrategyContract) -> TxResult:
        result = vault.set_strategy(strategy.address)
        self._transactions.append(result)
        return result

    def configure_rewards(
        self,
        vault: VaultContract,
        reward_per_block: int,
        start_block: int,
        end_block: int,
    ) -> TxResult:
        result = vault.set_reward_factors(reward_per_block, start_block, end_block)
        self._transactions.append(result)
        return result

    def set_reward_mode(self, vault: VaultContract, enabled: bool) -> TxResult:
        result = vault.set_reward_mode(enabled)
        self._transactions.append(result)
        return result

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------
    def run(self) -> DeployResult:
        options = self._options
        reward_per_block = parse_ether(options.reward_per_block)

        self._emit(f"Deploying contracts with the account: {self._client.address}")
        before_balance = self._client.get_balance()
        self._emit(f"Account balance: {before_balance} ({to_ether(before_balance)})")

        if options.redeploy_vault:
            vault = self.deploy_vault(self._network.token_address)
            self._emit(f"Deployed Vault... ({vault.address})")
        else:
            vault = self.attach_vault(self._network.vault_address)
            self._emit(f"Attached Vault... ({vault.address})")
        self._wait("vault")

        if options.redeploy_strategy:
            strategy = self.deploy_strategy(vault.address)
            self._emit(f"Deployed Strategy... ({strategy.address})")
        else:
            strategy = self.attach_strategy(self._network.strategy_address)
            self._emit(f"Attached Strategy... ({strategy.address})")
        self._wait("strategy")

        self._emit("Setting strategy address...")
        self.wire_up(vault, strategy)

        self._emit("Setting Wault reward factors...")
        start_block, end_block = reward_window(
            self._client.block_number(), options.reward_duration_blocks
        )
        self.configure_rewards(vault, reward_per_block, start_block, end_block)
        logger.info(
            "Reward schedule %s per block over blocks %s..%s",
            to_ether(reward_per_block),
            start_block,
            end_block,
        )

        if options.disable_rewards:
            self._emit("Disabling Wault reward...")
            self.set_reward_mode(vault, False)

        after_balance = self._client.get_balance()
        cost = before_balance - after_balance
        self._emit(f"Deployed cost: {cost} ({to_ether(cost)})")

        return DeployResult(
            vault_address=vault.address,
            strategy_address=strategy.address,
            vault_deployed=options.redeploy_vault,
            strategy_deployed=options.redeploy_strategy,
            reward_per_block=reward_per_block,
            start_block=start_block,
            end_block=end_block,
            cost=cost,
            transactions=self.transactions,
        )

    def _wait(self, step: str) -> None:
        cancelled = pause(self._options.step_delay, step, self._cancel)
        if cancelled or (self._cancel is not None and self._cancel.is_set()):
            raise WaultOpsError(
                f"Deployment cancelled after the {step} step",
                details={"transactions": [tx.tx_hash for tx in self._transactions]},
            )

    def _deploy(self, contract_name: str, *args: Address) -> TxResult:
        artifact = self._artifact_loader(self._options.artifacts_dir, contract_name)
        result = self._client.deploy(artifact, list(args))
        self._transactions.append(result)
        return result
