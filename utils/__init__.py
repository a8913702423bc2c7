"""
Utilities Package
Configuration, connections, fees, persistence and explorer access
"""

from .network_config import NetworkConfig, NetworkRegistry
from .rpc_manager import RPCManager
from .gas_calculator import GasCalculator
from .deployment_store import DeploymentStore
from .explorer_verifier import ExplorerVerifier

__all__ = [
    'NetworkConfig',
    'NetworkRegistry',
    'RPCManager',
    'GasCalculator',
    'DeploymentStore',
    'ExplorerVerifier'
]
