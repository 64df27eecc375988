"""Command line entry points: account report, deployment and inspection."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime

from dotenv import find_dotenv, load_dotenv

from .client import VaultOpsClient
from .config import (
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DeployOptions,
    InspectOptions,
    load_connection_config,
    select_network,
)
from .constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_INSPECT_HOLDER,
    DEFAULT_REWARD_DURATION_BLOCKS,
    DEFAULT_REWARD_PER_BLOCK,
)
from .deployer import Deployer
from .inspector import Inspector
from .reporter import report_account

logger = logging.getLogger("wault_ops")


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOGLEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_env(argv: Sequence[str] | None) -> None:
    """Load ``.env`` from the working directory, then any ``--env-file`` over it.

    Runs before the parser is built so its environment defaults see the loaded values.
    """
    load_dotenv(find_dotenv(usecwd=True))

    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", default=None)
    known, _ = pre.parse_known_args(argv)
    if known.env_file:
        load_dotenv(known.env_file, override=True)


def _build_client(args: argparse.Namespace, environ: Mapping[str, str]) -> VaultOpsClient:
    network = select_network(environ)
    config = load_connection_config(
        environ,
        request_timeout=args.request_timeout,
        receipt_timeout=args.receipt_timeout,
    )
    return VaultOpsClient(network, config)


def cmd_account(args: argparse.Namespace, environ: Mapping[str, str]) -> None:
    with _build_client(args, environ) as client:
        report_account(client)


def cmd_deploy(args: argparse.Namespace, environ: Mapping[str, str]) -> None:
    options = DeployOptions(
        reward_per_block=args.reward_per_block,
        reward_duration_blocks=args.reward_duration_blocks,
        redeploy_vault=not args.attach_vault,
        redeploy_strategy=not args.attach_strategy,
        disable_rewards=args.disable_rewards,
        artifacts_dir=args.artifacts_dir,
        step_delay=args.step_delay,
    )
    with _build_client(args, environ) as client:
        Deployer(client, client.network, options).run()


def cmd_inspect(args: argparse.Namespace, environ: Mapping[str, str]) -> None:
    options = InspectOptions(holder=args.holder)
    with _build_client(args, environ) as client:
        Inspector(client, client.network, options).snapshot()


Command = Callable[[argparse.Namespace, Mapping[str, str]], None]

COMMANDS: dict[str, tuple[Command, str]] = {
    "account": (cmd_account, "Print the signer balance and current block"),
    "deploy": (cmd_deploy, "Deploy and wire the vault/strategy pair"),
    "inspect": (cmd_inspect, "Print a snapshot of deployed vault accounting"),
}


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--env-file", default=None, help="Path to a .env file to load")
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="HTTP timeout for RPC requests in seconds",
    )
    parser.add_argument(
        "--receipt-timeout",
        type=float,
        default=DEFAULT_RECEIPT_TIMEOUT,
        help="Seconds to wait for a transaction receipt",
    )


def _add_command_arguments(name: str, parser: argparse.ArgumentParser) -> None:
    _add_common_arguments(parser)

    if name == "deploy":
        parser.add_argument(
            "--reward-per-block",
            default=os.getenv("REWARD_PER_BLOCK", DEFAULT_REWARD_PER_BLOCK),
            help="Reward tokens per block, as a decimal amount",
        )
        parser.add_argument(
            "--reward-duration-blocks",
            type=int,
            default=int(os.getenv("REWARD_DURATION_BLOCKS", DEFAULT_REWARD_DURATION_BLOCKS)),
            help="Length of the reward schedule in blocks",
        )
        parser.add_argument(
            "--attach-vault",
            action="store_true",
            help="Reuse the configured VAULT_* address instead of deploying a new vault",
        )
        parser.add_argument(
            "--attach-strategy",
            action="store_true",
            help="Reuse the configured STRATEGY_* address instead of deploying a new strategy",
        )
        parser.add_argument(
            "--disable-rewards",
            action="store_true",
            help="Switch the vault reward mode off after configuring it",
        )
        parser.add_argument(
            "--artifacts-dir",
            default=os.getenv("ARTIFACTS_DIR", DEFAULT_ARTIFACTS_DIR),
            help="Directory holding compiled contract artifacts",
        )
        parser.add_argument(
            "--step-delay",
            type=float,
            default=0.0,
            help="Seconds to wait between deployment steps",
        )
    elif name == "inspect":
        parser.add_argument(
            "--holder",
            default=os.getenv("INSPECT_HOLDER", DEFAULT_INSPECT_HOLDER),
            help="Share holder whose position is reported",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wault-ops", description="Deploy and inspect the Wault vault/strategy pair"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        _add_command_arguments(name, subparsers.add_parser(name, help=help_text))
    return parser


def run_command(
    name: str, args: argparse.Namespace, environ: Mapping[str, str] | None = None
) -> int:
    """Run one command; return the process exit code."""

    if environ is None:
        environ = os.environ

    command, _ = COMMANDS[name]
    print(datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
    try:
        command(args, environ)
    except Exception as exc:
        logger.debug("Command %s failed", name, exc_info=True)
        traceback.print_exc(file=sys.stderr)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    _load_env(argv)
    _configure_logging()
    args = build_parser().parse_args(argv)
    return run_command(args.command, args)


def _single_command_main(name: str, argv: Sequence[str] | None = None) -> int:
    _load_env(argv)
    _configure_logging()
    _, help_text = COMMANDS[name]
    parser = argparse.ArgumentParser(prog=f"wault-{name}", description=help_text)
    _add_command_arguments(name, parser)
    args = parser.parse_args(argv)
    return run_command(name, args)


def account_main(argv: Sequence[str] | None = None) -> int:
    return _single_command_main("account", argv)


def deploy_main(argv: Sequence[str] | None = None) -> int:
    return _single_command_main("deploy", argv)


def inspect_main(argv: Sequence[str] | None = None) -> int:
    return _single_command_main("inspect", argv)


if __name__ == "__main__":
    sys.exit(main())
