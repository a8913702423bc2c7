"""
Deployment Store
Persists deployment records as JSON, one file per network and contract
"""

import os
import json
from typing import Dict, Optional
from loguru import logger


class DeploymentStore:
    """
    Records live under <deployments_dir>/<network>/<Contract>.json
    """

    def __init__(self, deployments_dir: str = "deployments"):
        self.deployments_dir = deployments_dir

    def _record_path(self, network: str, contract_name: str) -> str:
        return os.path.join(self.deployments_dir, network, f"{contract_name}.json")

    def save(self, record: Dict) -> str:
        """
        Write a deployment record, replacing any previous one

        Returns:
            Path written
        """
        path = self._record_path(record['network'], record['contractName'])
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, 'w') as f:
            json.dump(record, f, indent=2)

        logger.success(f"Saved deployment record: {path}")
        return path

    def load(self, network: str, contract_name: str) -> Optional[Dict]:
        """Read a deployment record, None if the contract was never deployed there"""
        path = self._record_path(network, contract_name)

        if not os.path.exists(path):
            return None

        with open(path, 'r') as f:
            return json.load(f)
