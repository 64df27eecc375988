"""Constants for the Wault vault operations toolkit."""

from enum import Enum

# Fixed-point base used by the vault for token amounts and price per share.
ETHER_DECIMALS = 18
WEI_PER_ETHER = 10**ETHER_DECIMALS

# Reward schedule pushed by the deployer unless overridden.
DEFAULT_REWARD_PER_BLOCK = "1000"
# ~30 days of 3 second blocks.
DEFAULT_REWARD_DURATION_BLOCKS = 864_000

# Share holder reported by the inspect command unless overridden.
DEFAULT_INSPECT_HOLDER = "0xC627D743B1BfF30f853AE218396e6d47a4f34ceA"

VAULT_CONTRACT_NAME = "WaultBtcbVault"
STRATEGY_CONTRACT_NAME = "WaultBtcbVenusStrategy"

DEFAULT_ARTIFACTS_DIR = "artifacts"


class Network(str, Enum):
    """Deployment environments selectable through the ``NETWORK`` flag."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def env_suffix(self) -> str:
        """Suffix of the environment variables holding this network's settings."""

        return "MAIN" if self is Network.MAINNET else "TEST"

    @classmethod
    def from_flag(cls, flag: str | None) -> "Network":
        """Map the raw ``NETWORK`` value to a network; anything but mainnet is testnet."""

        if flag == cls.MAINNET.value:
            return cls.MAINNET
        return cls.TESTNET
