"""Configuration containers for vault operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_INSPECT_HOLDER,
    DEFAULT_REWARD_DURATION_BLOCKS,
    DEFAULT_REWARD_PER_BLOCK,
    Network,
)
from .exceptions import ValidationError
from .utils import parse_ether

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_RECEIPT_TIMEOUT = 300.0


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoint and contract addresses for one deployment environment.

    Fields are ``None`` when the environment does not provide them. Nothing is
    validated here; a missing endpoint or address surfaces at first use.
    """

    network: Network
    rpc_url: str | None = None
    token_address: str | None = None
    vault_address: str | None = None
    strategy_address: str | None = None
    reward_token_address: str | None = None

    @property
    def is_mainnet(self) -> bool:
        return self.network is Network.MAINNET


@dataclass(frozen=True)
class ConnectionConfig:
    """Signer and transport settings."""

    private_key: str
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT


@dataclass(frozen=True)
class DeployOptions:
    """Inputs of a deployment run."""

    reward_per_block: str = DEFAULT_REWARD_PER_BLOCK
    reward_duration_blocks: int = DEFAULT_REWARD_DURATION_BLOCKS
    redeploy_vault: bool = True
    redeploy_strategy: bool = True
    disable_rewards: bool = False
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR
    step_delay: float = 0.0

    def __post_init__(self) -> None:
        if parse_ether(self.reward_per_block) < 0:
            raise ValidationError(
                "Reward per block cannot be negative",
                field="reward_per_block",
                value=self.reward_per_block,
            )
        if self.reward_duration_blocks < 0:
            raise ValidationError(
                "Reward duration cannot be negative",
                field="reward_duration_blocks",
                value=self.reward_duration_blocks,
            )


@dataclass(frozen=True)
class InspectOptions:
    """Inputs of an inspection run."""

    holder: str = DEFAULT_INSPECT_HOLDER


def _env_value(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def select_network(environ: Mapping[str, str]) -> NetworkConfig:
    """Resolve the network configuration from the ``NETWORK`` flag.

    ``NETWORK=mainnet`` selects the ``*_MAIN`` variables; any other value, including
    an unset flag, selects the ``*_TEST`` variables. Fields are never mixed across
    the two sets.
    """

    network = Network.from_flag(environ.get("NETWORK"))
    suffix = network.env_suffix

    config = NetworkConfig(
        network=network,
        rpc_url=_env_value(environ, f"URL_{suffix}"),
        token_address=_env_value(environ, f"BTCB_{suffix}"),
        vault_address=_env_value(environ, f"VAULT_{suffix}"),
        strategy_address=_env_value(environ, f"STRATEGY_{suffix}"),
        reward_token_address=_env_value(environ, f"WAULT_{suffix}"),
    )
    logger.debug("Selected %s configuration (rpc=%s)", network.value, config.rpc_url)
    return config


def load_connection_config(
    environ: Mapping[str, str],
    *,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
) -> ConnectionConfig:
    """Build the signer settings from ``PRIVATE_KEY``."""

    private_key = _env_value(environ, "PRIVATE_KEY")
    if not private_key:
        raise ValidationError("PRIVATE_KEY not found in environment variables", field="PRIVATE_KEY")

    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return ConnectionConfig(
        private_key=private_key,
        request_timeout=request_timeout,
        receipt_timeout=receipt_timeout,
    )
