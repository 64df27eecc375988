"""Read-only snapshot of deployed vault accounting."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .client import VaultOpsClient
from .config import InspectOptions, NetworkConfig
from .types import VaultSnapshot
from .utils import compute_claimed, compute_earned, to_ether

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]


class Inspector:
    """Print vault, strategy and token state in a fixed order.

    Each value is emitted as soon as it is read so a failing call still leaves
    the preceding values on screen.
    """

    def __init__(
        self,
        client: VaultOpsClient,
        network: NetworkConfig,
        options: InspectOptions | None = None,
        *,
        emit: Emit = print,
    ) -> None:
        self._client = client
        self._network = network
        self._options = options or InspectOptions()
        self._emit = emit

    def snapshot(self) -> VaultSnapshot:
        emit = self._emit
        client = self._client
        network = self._network
        holder = self._options.holder

        emit(f"Deploying contracts with the account: {client.address}")
        before_balance = client.get_balance()
        emit(f"Account balance: {before_balance} ({to_ether(before_balance)})")

        vault = client.vault(network.vault_address)
        strategy = client.strategy(network.strategy_address)
        emit(f"Deployed Vault... ({vault.address})")
        emit(f"Deployed Strategy... ({strategy.address})")

        block_number = client.block_number()
        emit(f"Block number: {block_number}")

        token = client.token(network.token_address)
        strategy_token_balance = token.balance_of(strategy.address)
        emit(f"btcbBalance: {to_ether(strategy_token_balance)}")

        reward_token = client.token(network.reward_token_address, name="reward_token_address")
        vault_reward_balance = reward_token.balance_of(vault.address)
        emit(f"waultBalance: {to_ether(vault_reward_balance)}")

        reward_per_block = vault.reward_per_block()
        emit(f"waultRewardPerBlock: {reward_per_block}")
        last_reward_block = vault.last_reward_block()
        emit(f"lastRewardBlock: {last_reward_block}")
        acc_reward_per_share = vault.acc_reward_per_share()
        emit(f"accWaultPerShare: {acc_reward_per_share}")

        total_supply = vault.total_supply()
        emit(f"totalSupply: {to_ether(total_supply)}")
        strategy_balance = strategy.balance_of()
        emit(f"balanceOfUnderlying: {to_ether(strategy_balance)}")
        vault_balance = vault.balance()
        emit(f"balance: {to_ether(vault_balance)}")
        claimed = compute_claimed(vault_balance, total_supply)
        emit(f"claimed: {to_ether(claimed)}")

        price_per_share = vault.price_per_full_share()
        emit(f"pricePerShare: {to_ether(price_per_share)}")

        holder_balance = vault.balance_of(holder)
        emit(f"balanceOf: {to_ether(holder_balance)} ({holder})")
        earned = compute_earned(holder_balance, price_per_share)
        emit(f"earned: {to_ether(earned)}")
        claimable = vault.claimable(holder)
        emit(f"claimable: {to_ether(claimable)}")

        cost = before_balance - client.get_balance()
        emit(f"Test cost: {cost} ({to_ether(cost)})")
        logger.debug("Inspection of %s finished at block %s", vault.address, block_number)

        return VaultSnapshot(
            vault_address=vault.address,
            strategy_address=strategy.address,
            block_number=block_number,
            strategy_token_balance=strategy_token_balance,
            vault_reward_balance=vault_reward_balance,
            reward_per_block=reward_per_block,
            last_reward_block=last_reward_block,
            acc_reward_per_share=acc_reward_per_share,
            total_supply=total_supply,
            strategy_balance=strategy_balance,
            vault_balance=vault_balance,
            claimed=claimed,
            price_per_share=price_per_share,
            holder=holder,
            holder_balance=holder_balance,
            earned=earned,
            claimable=claimable,
            cost=cost,
        )
