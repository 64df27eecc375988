"""Connection helpers: Web3 provider, signer and contract handles."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress

from .config import ConnectionConfig, NetworkConfig
from .exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)


def to_checksum(address: str | None, *, field: str) -> ChecksumAddress:
    """Checksum an address, failing loudly when it is missing or malformed."""

    if not address:
        raise ValidationError(f"{field} is not configured", field=field, value=address)
    try:
        return Web3.to_checksum_address(address)
    except (ValueError, TypeError) as exc:
        raise ValidationError(
            f"{field} is not a valid address",
            field=field,
            value=address,
            details={"error": str(exc)},
        ) from exc


class Web3Connections:
    """Manage the Web3 provider, signing middleware and contract handles."""

    def __init__(self, network: NetworkConfig, config: ConnectionConfig):
        self.network = network
        self.config = config
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._account: LocalAccount | None = None
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Initialise the provider and bind the signer to it."""

        try:
            signer = cast(LocalAccount, Account.from_key(self.config.private_key))  # type: ignore[arg-type]
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

        self._account = signer

        provider, web3 = self._build_web3_provider(self.network.rpc_url)
        self._provider = provider
        self._web3 = web3
        self._apply_account_middleware(web3, signer)

        self._connected = True
        logger.info("Connected to %s RPC at %s", self.network.network.value, self.network.rpc_url)

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._account = None
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError("RPC connection is not open", endpoint=self.network.rpc_url)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call connect() first",
                endpoint=self.network.rpc_url,
            )
        return self._account

    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.network.rpc_url)
        return self._web3

    @property
    def address(self) -> ChecksumAddress:
        return self.account.address

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_balance(self, address: str | None = None) -> int:
        """Native balance in wei, of the signer unless ``address`` is given."""

        target = to_checksum(address, field="address") if address else self.address
        try:
            return int(self.web3.eth.get_balance(target))
        except Exception as exc:
            raise NetworkError(
                "Failed to read native balance",
                endpoint=self.network.rpc_url,
                details={"address": target, "error": str(exc)},
            ) from exc

    def block_number(self) -> int:
        try:
            return int(self.web3.eth.block_number)
        except Exception as exc:
            raise NetworkError(
                "Failed to read block number",
                endpoint=self.network.rpc_url,
                details={"error": str(exc)},
            ) from exc

    def contract(self, address: str | None, abi: Sequence[dict[str, Any]], *, name: str) -> Contract:
        """Return a contract handle bound to the signer."""

        checksum = to_checksum(address, field=name)
        return self.web3.eth.contract(address=checksum, abi=list(abi))

    def contract_factory(self, abi: Sequence[dict[str, Any]], bytecode: str) -> type[Contract]:
        return self.web3.eth.contract(abi=list(abi), bytecode=bytecode)

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _build_web3_provider(self, rpc_url: str | None) -> tuple[HTTPProvider, Web3]:
        if not rpc_url:
            raise NetworkError(
                f"RPC endpoint is not configured for {self.network.network.value}",
                endpoint=rpc_url,
                details={"variable": f"URL_{self.network.network.env_suffix}"},
            )

        provider = HTTPProvider(rpc_url, request_kwargs={"timeout": self.config.request_timeout})
        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=rpc_url)
        return provider, web3

    def _apply_account_middleware(self, web3: Web3, account: LocalAccount) -> None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address
