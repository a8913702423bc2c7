"""
Network Configuration
Loads compiler, network and explorer settings from config/networks.json
and resolves the environment variables each network names
"""

import os
import json
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


DEFAULT_CONFIG_PATH = "config/networks.json"


class NetworkConfig:
    """Resolved connection parameters for a single named network"""

    def __init__(
        self,
        key: str,
        name: str,
        url: str,
        chain_id: int,
        accounts,
        timeout: float,
        polling_interval: Optional[float] = None,
        gas_price: Optional[int] = None
    ):
        self.key = key
        self.name = name
        self.url = url
        self.chain_id = chain_id
        # Either a list of private keys or "remote" (node-managed accounts)
        self.accounts = accounts
        self.timeout = timeout
        self.polling_interval = polling_interval
        self.gas_price = gas_price

    @property
    def uses_remote_accounts(self) -> bool:
        return self.accounts == "remote"

    def __repr__(self):
        return f"NetworkConfig({self.key!r}, chain_id={self.chain_id}, url={self.url!r})"


class NetworkRegistry:
    """
    Static deployment configuration

    Holds the compiler list, per-network connection settings and explorer
    API keys. Values are read from the environment only when a network is
    resolved, so unused networks never need their variables set.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize Network Registry

        Args:
            config_path: Path to the networks JSON file
        """
        self.config_path = config_path

        with open(config_path, 'r') as f:
            self.config = json.load(f)

        self.networks = self.config['networks']
        self.default_network = self.config.get('default_network', 'hardhat')
        self.deployment_settings = self.config.get('deployment', {})

        logger.debug(f"Loaded {len(self.networks)} networks from {config_path}")

    def compiler_versions(self) -> List[str]:
        """Get configured solc versions"""
        return [c['version'] for c in self.config['solidity']['compilers']]

    def network_names(self) -> List[str]:
        return list(self.networks.keys())

    def artifacts_dir(self) -> str:
        return self.config.get('paths', {}).get('artifacts', 'artifacts')

    def deployments_dir(self) -> str:
        return self.config.get('paths', {}).get('deployments', 'deployments')

    def _network_entry(self, name: str) -> Dict:
        if name not in self.networks:
            raise ValueError(
                f"Unknown network '{name}' (available: {', '.join(self.networks)})"
            )
        return self.networks[name]

    def required_env_vars(self, name: str) -> List[str]:
        """
        List environment variables a network cannot be resolved without

        Args:
            name: Network name

        Returns:
            Variable names, in config order
        """
        entry = self._network_entry(name)
        required = []

        if 'url' not in entry:
            required.append(entry['url_env'])
        if 'chain_id' not in entry:
            required.append(entry['chain_id_env'])
        if entry.get('accounts') != 'remote':
            required.extend(entry.get('accounts_env', []))

        return required

    def missing_env_vars(self, name: str) -> List[str]:
        """List required environment variables that are unset or empty"""
        return [var for var in self.required_env_vars(name) if not os.getenv(var)]

    def get_network(self, name: Optional[str] = None) -> NetworkConfig:
        """
        Resolve a network against the current environment

        Args:
            name: Network name (None = default network)

        Returns:
            NetworkConfig

        Raises:
            ValueError: Unknown network, missing variables or bad chain id
        """
        name = name or self.default_network
        entry = self._network_entry(name)

        missing = self.missing_env_vars(name)
        if missing:
            raise ValueError(
                f"Network '{name}' requires environment variables: {', '.join(missing)}"
            )

        # Literal values win unless an override variable is set
        url = entry.get('url')
        if entry.get('url_env') and os.getenv(entry['url_env']):
            url = os.getenv(entry['url_env'])

        if 'chain_id' in entry:
            chain_id = int(entry['chain_id'])
        else:
            raw_chain_id = os.getenv(entry['chain_id_env'])
            try:
                chain_id = int(raw_chain_id.strip())
            except ValueError:
                raise ValueError(
                    f"{entry['chain_id_env']} must be an integer chain id, got {raw_chain_id!r}"
                )

        if entry.get('accounts') == 'remote':
            accounts = 'remote'
        else:
            accounts = [os.getenv(var) for var in entry.get('accounts_env', [])]

        polling_ms = entry.get('polling_interval_ms')

        network = NetworkConfig(
            key=name,
            name=entry.get('name', name),
            url=url,
            chain_id=chain_id,
            accounts=accounts,
            timeout=entry.get('timeout_ms', 20000) / 1000,
            polling_interval=polling_ms / 1000 if polling_ms else None,
            gas_price=entry.get('gas_price')
        )

        logger.debug(f"Resolved network {network}")
        return network

    def explorer_api_key(self, name: str) -> Optional[str]:
        """
        Get the block explorer API key for a network

        Returns:
            API key, or None if the network has no explorer key configured
        """
        env_var = self.config.get('etherscan', {}).get('api_keys', {}).get(name)
        if not env_var:
            return None
        return os.getenv(env_var) or None

    def explorer_settings(self) -> Dict:
        return self.config.get('etherscan', {})
