"""Supported EVM networks, address normalization and per-network example data."""

from __future__ import annotations

import re
from enum import Enum

from token_explorer.token_api.exceptions import InvalidRequest

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class NetworkId(str, Enum):
    MAINNET = "mainnet"
    BASE = "base"
    ARBITRUM_ONE = "arbitrum-one"
    BSC = "bsc"
    OPTIMISM = "optimism"
    MATIC = "matic"
    UNICHAIN = "unichain"


NETWORK_NAMES: dict[str, str] = {
    NetworkId.MAINNET.value: "Ethereum",
    NetworkId.BASE.value: "Base",
    NetworkId.ARBITRUM_ONE.value: "Arbitrum",
    NetworkId.BSC.value: "BSC",
    NetworkId.OPTIMISM.value: "Optimism",
    NetworkId.MATIC.value: "Polygon",
    NetworkId.UNICHAIN.value: "Unichain",
}

# Known-good tokens suggested when a lookup comes back empty
EXAMPLE_TOKENS: dict[str, tuple[str, str]] = {
    NetworkId.MAINNET.value: ("GRT", "0xc944E90C64B2c07662A292be6244BDf05Cda44a7"),
    NetworkId.ARBITRUM_ONE.value: ("ARB", "0x912CE59144191C1204E64559FE8253a0e49E6548"),
    NetworkId.BASE.value: ("cbETH", "0x2Ae3F1Ec7F1F5012CFEab0185bfc7aa3cf0DEc22"),
    NetworkId.BSC.value: ("BSC-USD", "0x55d398326f99059fF775485246999027B3197955"),
    NetworkId.OPTIMISM.value: ("OP", "0x4200000000000000000000000000000000000042"),
}

BLOCK_EXPLORERS: dict[str, str] = {
    NetworkId.MAINNET.value: "https://etherscan.io",
    NetworkId.BASE.value: "https://basescan.org",
    NetworkId.ARBITRUM_ONE.value: "https://arbiscan.io",
    NetworkId.BSC.value: "https://bscscan.com",
    NetworkId.OPTIMISM.value: "https://optimistic.etherscan.io",
    NetworkId.MATIC.value: "https://polygonscan.com",
    NetworkId.UNICHAIN.value: "https://uniscan.xyz",
}

PROTOCOLS: dict[str, str] = {
    "uniswap_v2": "Uniswap V2",
    "uniswap_v3": "Uniswap V3",
}


def network_value(network_id: NetworkId | str | None, default: str = NetworkId.MAINNET.value) -> str:
    """Plain string id. Unrecognized ids pass through verbatim."""
    if network_id is None or network_id == "":
        return default
    if isinstance(network_id, NetworkId):
        return network_id.value
    return str(network_id)


def is_known_network(network_id: NetworkId | str) -> bool:
    return network_value(network_id) in NETWORK_NAMES


def network_name(network_id: NetworkId | str) -> str:
    value = network_value(network_id)
    return NETWORK_NAMES.get(value, value)


def example_token(network_id: NetworkId | str) -> tuple[str, str]:
    """(symbol, address) of the example token, mainnet's for unknown networks."""
    return EXAMPLE_TOKENS.get(network_value(network_id), EXAMPLE_TOKENS[NetworkId.MAINNET.value])


def protocol_name(protocol: str | None) -> str:
    if not protocol:
        return "Unknown"
    return PROTOCOLS.get(protocol, protocol.replace("_", " ").title())


def normalize_address(address: str | None) -> str | None:
    """Strip whitespace and enforce the 0x prefix. Case is preserved."""
    if address is None:
        return None
    address = address.strip()
    if not address:
        return None
    if not address.startswith("0x"):
        address = f"0x{address}"
    return address


def require_address(address: str | None, label: str = "address") -> str:
    """Normalize and validate a 20-byte hex address or raise InvalidRequest."""
    normalized = normalize_address(address)
    if normalized is None:
        raise InvalidRequest(f"Please enter a {label}")
    if not ADDRESS_RE.match(normalized):
        raise InvalidRequest(f"Please enter a valid {label}: {normalized}")
    return normalized


def explorer_token_url(network_id: NetworkId | str, address: str) -> str | None:
    base = BLOCK_EXPLORERS.get(network_value(network_id))
    return f"{base}/token/{address}" if base else None


def explorer_address_url(network_id: NetworkId | str, address: str) -> str | None:
    base = BLOCK_EXPLORERS.get(network_value(network_id))
    return f"{base}/address/{address}" if base else None


def explorer_tx_url(network_id: NetworkId | str, tx_hash: str) -> str | None:
    base = BLOCK_EXPLORERS.get(network_value(network_id))
    return f"{base}/tx/{tx_hash}" if base else None
