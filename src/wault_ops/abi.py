"""Minimal ABIs for the contracts driven by the toolkit.

Only the functions actually called are listed. Deployment uses the full ABI from
the compiled artifact instead.
"""


def _view(name: str, inputs: list[tuple[str, str]] | None = None, output: str = "uint256") -> dict:
    return {
        "inputs": [{"name": arg, "type": typ} for arg, typ in (inputs or [])],
        "name": name,
        "outputs": [{"name": "", "type": output}],
        "stateMutability": "view",
        "type": "function",
    }


def _write(name: str, inputs: list[tuple[str, str]]) -> dict:
    return {
        "inputs": [{"name": arg, "type": typ} for arg, typ in inputs],
        "name": name,
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    }


VAULT_ABI = [
    _write("setStrategy", [("_strategy", "address")]),
    _write(
        "setWaultRewardFactors",
        [
            ("_waultRewardPerBlock", "uint256"),
            ("_startBlock", "uint256"),
            ("_endBlock", "uint256"),
        ],
    ),
    _write("setWaultRewardMode", [("_flag", "bool")]),
    _view("balance"),
    _view("balanceOf", [("account", "address")]),
    _view("totalSupply"),
    _view("getPricePerFullShare"),
    _view("claimable", [("_user", "address")]),
    _view("waultRewardPerBlock"),
    _view("lastRewardBlock"),
    _view("accWaultPerShare"),
]

STRATEGY_ABI = [
    _view("balanceOf"),
]

ERC20_ABI = [
    _view("balanceOf", [("owner", "address")]),
]
