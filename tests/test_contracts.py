"""Tests for the web3-backed contract handles."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest

from wault_ops.contracts import Web3Strategy, Web3Token, Web3Vault
from wault_ops.exceptions import NetworkError, ValidationError
from wault_ops.transactions import TransactionDispatcher
from wault_ops.types import TxResult

VAULT = "0x2222222222222222222222222222222222222222"
HOLDER_LOWER = "0xc627d743b1bff30f853ae218396e6d47a4f34cea"
HOLDER = "0xC627D743B1BfF30f853AE218396e6d47a4f34ceA"


class DummyCall:
    def __init__(self, name: str, args: tuple[Any, ...], values: dict[str, Any]) -> None:
        self.fn_name = name
        self.args = args
        self._values = values

    def call(self) -> Any:
        value = self._values[self.fn_name]
        if isinstance(value, Exception):
            raise value
        return value


class DummyFunctions:
    def __init__(self, values: dict[str, Any]) -> None:
        self._values = values
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Any:
        def build(*args: Any) -> DummyCall:
            self.calls.append((name, args))
            return DummyCall(name, args, self._values)

        return build


def _contract(values: dict[str, Any]) -> Any:
    return SimpleNamespace(address=VAULT, functions=DummyFunctions(values))


class RecordingDispatcher:
    def __init__(self) -> None:
        self.sent: list[tuple[DummyCall, str, dict[str, Any]]] = []

    def send(self, contract_function: DummyCall, *, action: str, context: dict[str, Any]) -> TxResult:
        self.sent.append((contract_function, action, context))
        return TxResult(tx_hash="0x01", action=action)


def test_vault_reads_map_to_contract_functions() -> None:
    contract = _contract(
        {
            "balance": 1,
            "totalSupply": 2,
            "getPricePerFullShare": 3,
            "waultRewardPerBlock": 4,
            "lastRewardBlock": 5,
            "accWaultPerShare": 6,
            "balanceOf": 7,
            "claimable": 8,
        }
    )
    vault = Web3Vault(contract, cast(TransactionDispatcher, RecordingDispatcher()))

    assert vault.address == VAULT
    assert vault.balance() == 1
    assert vault.total_supply() == 2
    assert vault.price_per_full_share() == 3
    assert vault.reward_per_block() == 4
    assert vault.last_reward_block() == 5
    assert vault.acc_reward_per_share() == 6
    assert vault.balance_of(HOLDER_LOWER) == 7
    assert vault.claimable(HOLDER_LOWER) == 8
    assert ("balanceOf", (HOLDER,)) in contract.functions.calls
    assert ("claimable", (HOLDER,)) in contract.functions.calls


def test_vault_writes_go_through_dispatcher() -> None:
    dispatcher = RecordingDispatcher()
    vault = Web3Vault(_contract({}), cast(TransactionDispatcher, dispatcher))

    vault.set_strategy("0x6666666666666666666666666666666666666666")
    vault.set_reward_factors(1000 * 10**18, 10, 864_010)
    vault.set_reward_mode(False)

    assert [(call.fn_name, call.args, action) for call, action, _ in dispatcher.sent] == [
        ("setStrategy", ("0x6666666666666666666666666666666666666666",), "set_strategy"),
        ("setWaultRewardFactors", (1000 * 10**18, 10, 864_010), "set_reward_factors"),
        ("setWaultRewardMode", (False,), "set_reward_mode"),
    ]


def test_failed_call_wraps_error() -> None:
    strategy = Web3Strategy(_contract({"balanceOf": ValueError("execution reverted")}))

    with pytest.raises(NetworkError) as excinfo:
        strategy.balance_of()

    assert excinfo.value.endpoint == VAULT
    assert "execution reverted" in excinfo.value.details["error"]


def test_token_balance_of() -> None:
    token = Web3Token(_contract({"balanceOf": 42}))

    assert token.balance_of(HOLDER_LOWER) == 42


@pytest.mark.parametrize("account", ["0x1234", "not-an-address", ""])
def test_malformed_holder_is_rejected_before_calling(account: str) -> None:
    contract = _contract({"balanceOf": 7, "claimable": 8})
    vault = Web3Vault(contract, cast(TransactionDispatcher, RecordingDispatcher()))

    with pytest.raises(ValidationError) as excinfo:
        vault.balance_of(account)
    with pytest.raises(ValidationError):
        vault.claimable(account)

    assert excinfo.value.field == "holder"
    assert contract.functions.calls == []


def test_malformed_token_account_is_rejected() -> None:
    token = Web3Token(_contract({"balanceOf": 42}))

    with pytest.raises(ValidationError) as excinfo:
        token.balance_of("0xabc")

    assert excinfo.value.field == "account"
