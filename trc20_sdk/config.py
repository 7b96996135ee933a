"""
Network presets for the TRC-20 SDK.

Preset endpoints ship in ``networks.json``. Nothing here is read until a
client is constructed, and every value can be overridden by argument or
environment variable.
"""
import json
import os
import importlib.resources
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class Network(str, Enum):
    """Named network presets"""
    MAINNET = "mainnet"
    SHASTA = "shasta"
    NILE = "nile"


@dataclass(frozen=True)
class NetworkEndpoints:
    """
    Endpoints a client connects to.

    Attributes:
        full_node: Full node HTTP endpoint
        api_key: Optional TronGrid API key
        explorer: Optional block explorer prefix for transaction links
    """
    full_node: str
    api_key: Optional[str] = None
    explorer: Optional[str] = None

    @classmethod
    def custom(cls, full_node: str, api_key: Optional[str] = None,
               explorer: Optional[str] = None) -> "NetworkEndpoints":
        """Endpoints for a private or otherwise unlisted network."""
        return cls(full_node=full_node.rstrip('/'), api_key=api_key, explorer=explorer)

    def tx_url(self, txid: str) -> Optional[str]:
        """Block explorer URL for a transaction, if an explorer is configured."""
        if not self.explorer:
            return None
        return f"{self.explorer}{txid}"


class NetworkConfig:
    """Loads and resolves network presets."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load preset definitions from the packaged networks.json.

        Returns:
            Mapping of network name to its settings
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("trc20_sdk").joinpath("networks.json")
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: Union[Network, str]) -> Dict[str, Any]:
        """
        Get the settings of one preset.

        Raises:
            ValueError: If the network is unknown
        """
        name = network.value if isinstance(network, Network) else network
        networks = cls.load_networks()
        if name not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network {name!r}. Available networks: {available}")
        return networks[name]

    @classmethod
    def get_full_node_url(cls, network: Union[Network, str], override: Optional[str] = None) -> str:
        """
        Resolve the full node URL: override, then <NETWORK>_FULL_NODE_URL, then preset.
        """
        if override:
            return override
        name = network.value if isinstance(network, Network) else network
        env_var = f"{name.upper().replace('-', '_')}_FULL_NODE_URL"
        env_value = os.environ.get(env_var)
        if env_value:
            return env_value
        return cls.get_network(network)["fullNode"]

    @classmethod
    def get_endpoints(
        cls,
        network: Union[Network, str],
        full_node: Optional[str] = None,
        api_key: Optional[str] = None
    ) -> NetworkEndpoints:
        """
        Resolve the complete endpoint set of a preset.

        The API key comes from the argument, then TRONGRID_API_KEY.
        """
        settings = cls.get_network(network)
        return NetworkEndpoints(
            full_node=cls.get_full_node_url(network, override=full_node).rstrip('/'),
            api_key=api_key or os.environ.get("TRONGRID_API_KEY"),
            explorer=settings.get("explorer")
        )
