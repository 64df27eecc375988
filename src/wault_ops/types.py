"""Result records produced by the vault operations."""

from dataclasses import dataclass, field
from typing import Any

Address = str  # Ethereum address
Wei = int  # Raw 18-decimal amount


@dataclass
class TxResult:
    """Outcome of a mined transaction."""

    tx_hash: str
    action: str
    block_number: int | None = None
    gas_used: int | None = None
    contract_address: Address | None = None
    receipt: dict[str, Any] | None = None


@dataclass
class AccountReport:
    """Signer balance and chain height at the time of the report."""

    address: Address
    balance: Wei
    block_number: int


@dataclass
class DeployResult:
    """Addresses and transactions of a deployment run."""

    vault_address: Address
    strategy_address: Address
    vault_deployed: bool
    strategy_deployed: bool
    reward_per_block: Wei
    start_block: int
    end_block: int
    cost: Wei
    transactions: list[TxResult] = field(default_factory=list)


@dataclass
class VaultSnapshot:
    """Accounting fields read from the vault, strategy and tokens."""

    vault_address: Address
    strategy_address: Address
    block_number: int
    strategy_token_balance: Wei
    vault_reward_balance: Wei
    reward_per_block: Wei
    last_reward_block: int
    acc_reward_per_share: int
    total_supply: Wei
    strategy_balance: Wei
    vault_balance: Wei
    claimed: Wei
    price_per_share: Wei
    holder: Address
    holder_balance: Wei
    earned: Wei
    claimable: Wei
    cost: Wei = 0
