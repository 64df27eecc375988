"""Loading of compiled contract artifacts (ABI + creation bytecode)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .exceptions import ArtifactError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of one compiled contract."""

    name: str
    abi: list[dict[str, Any]]
    bytecode: str
    path: Path


def find_artifact(artifacts_dir: str | Path, contract_name: str) -> Path:
    """Locate ``<contract_name>.json`` anywhere below ``artifacts_dir``."""

    root = Path(artifacts_dir)
    if not root.is_dir():
        raise ArtifactError(
            "Artifacts directory not found",
            contract=contract_name,
            path=str(root),
        )

    matches = sorted(root.rglob(f"{contract_name}.json"))
    if not matches:
        raise ArtifactError(
            f"No artifact for {contract_name} under {root}",
            contract=contract_name,
            path=str(root),
        )
    if len(matches) > 1:
        logger.warning(
            "Multiple artifacts for %s, using %s (ignored: %s)",
            contract_name,
            matches[0],
            ", ".join(str(path) for path in matches[1:]),
        )
    return matches[0]


def load_artifact(artifacts_dir: str | Path, contract_name: str) -> ContractArtifact:
    """Read a Hardhat or Foundry style artifact for ``contract_name``."""

    path = find_artifact(artifacts_dir, contract_name)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ArtifactError(
            f"Failed to read artifact for {contract_name}",
            contract=contract_name,
            path=str(path),
            details={"error": str(exc)},
        ) from exc

    abi = data.get("abi")
    bytecode = data.get("bytecode") or data.get("evm", {}).get("bytecode", {})
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")

    if not isinstance(abi, list) or not bytecode:
        raise ArtifactError(
            f"Artifact for {contract_name} lacks abi or bytecode",
            contract=contract_name,
            path=str(path),
        )

    bytecode = str(bytecode)
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if bytecode == "0x":
        raise ArtifactError(
            f"Artifact for {contract_name} has empty bytecode (abstract contract?)",
            contract=contract_name,
            path=str(path),
        )

    logger.debug("Loaded artifact %s from %s", contract_name, path)
    return ContractArtifact(name=contract_name, abi=abi, bytecode=bytecode, path=path)
