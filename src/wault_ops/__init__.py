"""Wault vault operations - deploy, wire and inspect a vault/strategy pair.

This library drives the ``WaultBtcbVault`` and ``WaultBtcbVenusStrategy``
contracts over JSON-RPC: it reports the signer account, deploys and links the
pair with its reward schedule, and prints a snapshot of the vault accounting.
"""

from .client import VaultOpsClient
from .config import (
    ConnectionConfig,
    DeployOptions,
    InspectOptions,
    NetworkConfig,
    load_connection_config,
    select_network,
)
from .constants import Network
from .contracts import StrategyContract, TokenContract, VaultContract
from .deployer import Deployer
from .exceptions import (
    ArtifactError,
    NetworkError,
    TransactionError,
    ValidationError,
    WaultOpsError,
)
from .inspector import Inspector
from .reporter import report_account
from .types import AccountReport, DeployResult, TxResult, VaultSnapshot
from .utils import compute_claimed, compute_earned, parse_ether, to_ether

__version__ = "0.1.0"

__all__ = [
    # Client and operations
    "VaultOpsClient",
    "Deployer",
    "Inspector",
    "report_account",
    # Configuration
    "Network",
    "NetworkConfig",
    "ConnectionConfig",
    "DeployOptions",
    "InspectOptions",
    "select_network",
    "load_connection_config",
    # Contract interfaces
    "VaultContract",
    "StrategyContract",
    "TokenContract",
    # Results
    "AccountReport",
    "DeployResult",
    "TxResult",
    "VaultSnapshot",
    # Exceptions
    "WaultOpsError",
    "ValidationError",
    "NetworkError",
    "TransactionError",
    "ArtifactError",
    # Utility functions
    "to_ether",
    "parse_ether",
    "compute_claimed",
    "compute_earned",
]
