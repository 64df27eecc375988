"""Narrow interfaces to the vault, strategy and token contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from web3.contract import Contract

from .connections import to_checksum
from .exceptions import NetworkError
from .transactions import TransactionDispatcher
from .types import Address, TxResult


class TokenContract(ABC):
    """ERC-20 token, read side only."""

    @property
    @abstractmethod
    def address(self) -> Address:
        pass

    @abstractmethod
    def balance_of(self, account: Address) -> int:
        pass


class StrategyContract(ABC):
    """Strategy that deploys the vault's underlying funds."""

    @property
    @abstractmethod
    def address(self) -> Address:
        pass

    @abstractmethod
    def balance_of(self) -> int:
        """Underlying balance managed by the strategy."""
        pass


class VaultContract(ABC):
    """Share-issuing vault with a block-based reward schedule."""

    @property
    @abstractmethod
    def address(self) -> Address:
        pass

    @abstractmethod
    def set_strategy(self, strategy: Address) -> TxResult:
        pass

    @abstractmethod
    def set_reward_factors(self, reward_per_block: int, start_block: int, end_block: int) -> TxResult:
        pass

    @abstractmethod
    def set_reward_mode(self, enabled: bool) -> TxResult:
        pass

    @abstractmethod
    def balance(self) -> int:
        pass

    @abstractmethod
    def balance_of(self, account: Address) -> int:
        pass

    @abstractmethod
    def total_supply(self) -> int:
        pass

    @abstractmethod
    def price_per_full_share(self) -> int:
        pass

    @abstractmethod
    def claimable(self, account: Address) -> int:
        pass

    @abstractmethod
    def reward_per_block(self) -> int:
        pass

    @abstractmethod
    def last_reward_block(self) -> int:
        pass

    @abstractmethod
    def acc_reward_per_share(self) -> int:
        pass


class _Web3Handle:
    def __init__(self, contract: Contract) -> None:
        self._contract = contract

    @property
    def address(self) -> Address:
        return self._contract.address

    def _call(self, function_name: str, *args: Any) -> int:
        try:
            return int(getattr(self._contract.functions, function_name)(*args).call())
        except Exception as exc:
            raise NetworkError(
                f"Call to {function_name} failed",
                endpoint=self._contract.address,
                details={"args": list(args), "error": str(exc)},
            ) from exc


class Web3Token(_Web3Handle, TokenContract):
    def balance_of(self, account: Address) -> int:
        return self._call("balanceOf", to_checksum(account, field="account"))


class Web3Strategy(_Web3Handle, StrategyContract):
    def balance_of(self) -> int:
        return self._call("balanceOf")


class Web3Vault(_Web3Handle, VaultContract):
    """Vault handle; writes go through the dispatcher and wait for inclusion."""

    def __init__(self, contract: Contract, dispatcher: TransactionDispatcher) -> None:
        super().__init__(contract)
        self._dispatcher = dispatcher

    def set_strategy(self, strategy: Address) -> TxResult:
        strategy = to_checksum(strategy, field="strategy_address")
        return self._dispatcher.send(
            self._contract.functions.setStrategy(strategy),
            action="set_strategy",
            context={"strategy": strategy},
        )

    def set_reward_factors(self, reward_per_block: int, start_block: int, end_block: int) -> TxResult:
        return self._dispatcher.send(
            self._contract.functions.setWaultRewardFactors(reward_per_block, start_block, end_block),
            action="set_reward_factors",
            context={
                "reward_per_block": reward_per_block,
                "start_block": start_block,
                "end_block": end_block,
            },
        )

    def set_reward_mode(self, enabled: bool) -> TxResult:
        return self._dispatcher.send(
            self._contract.functions.setWaultRewardMode(enabled),
            action="set_reward_mode",
            context={"enabled": enabled},
        )

    def balance(self) -> int:
        return self._call("balance")

    def balance_of(self, account: Address) -> int:
        return self._call("balanceOf", to_checksum(account, field="holder"))

    def total_supply(self) -> int:
        return self._call("totalSupply")

    def price_per_full_share(self) -> int:
        return self._call("getPricePerFullShare")

    def claimable(self, account: Address) -> int:
        return self._call("claimable", to_checksum(account, field="holder"))

    def reward_per_block(self) -> int:
        return self._call("waultRewardPerBlock")

    def last_reward_block(self) -> int:
        return self._call("lastRewardBlock")

    def acc_reward_per_share(self) -> int:
        return self._call("accWaultPerShare")
