"""
RPC Manager
Opens and caches Web3 connections for configured networks
"""

from typing import Dict
from web3 import Web3
from loguru import logger

from utils.network_config import NetworkConfig


class RPCManager:
    """
    One Web3 instance per network

    Every connection is checked against the chain id the network is
    configured with before it is handed out.
    """

    def __init__(self):
        """Initialize RPC Manager"""
        self.w3_instances = {}
        self.networks = {}

    def _create_web3(self, network: NetworkConfig) -> Web3:
        """Create a Web3 instance honouring the network's request timeout"""
        provider = Web3.HTTPProvider(
            network.url,
            request_kwargs={'timeout': network.timeout}
        )
        return Web3(provider)

    def connect(self, network: NetworkConfig) -> Web3:
        """
        Connect to a network

        Args:
            network: Resolved network configuration

        Returns:
            Connected Web3 instance

        Raises:
            RuntimeError: Node unreachable or serving a different chain
        """
        if network.key in self.w3_instances:
            return self.w3_instances[network.key]

        w3 = self._create_web3(network)

        if not w3.is_connected():
            raise RuntimeError(f"Failed to connect to {network.name} at {network.url}")

        actual_chain_id = w3.eth.chain_id
        if actual_chain_id != network.chain_id:
            raise RuntimeError(
                f"Chain id mismatch on {network.name}: configured {network.chain_id}, "
                f"node reports {actual_chain_id}"
            )

        self.w3_instances[network.key] = w3
        self.networks[network.key] = network

        logger.success(f"Connected to {network.name} (chain id {actual_chain_id})")
        return w3

    def get_web3(self, name: str) -> Web3:
        """Get an already opened connection"""
        if name not in self.w3_instances:
            raise ValueError(f"Network {name} is not connected")
        return self.w3_instances[name]

    def is_healthy(self, name: str) -> bool:
        """
        Check if a connection is still usable

        Returns:
            True if connected
        """
        try:
            return self.get_web3(name).is_connected()
        except Exception:
            return False

    def get_status(self) -> Dict:
        """Get status of all opened connections"""
        return {
            name: {
                'name': network.name,
                'chain_id': network.chain_id,
                'connected': self.is_healthy(name)
            }
            for name, network in self.networks.items()
        }
