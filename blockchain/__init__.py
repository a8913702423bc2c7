"""
Blockchain Interaction Package
Handles artifacts, deployment transactions and the Claims deployment
"""

from .artifacts import ArtifactStore
from .transaction_builder import TransactionBuilder
from .contract_deployer import ContractDeployer

__all__ = ['ArtifactStore', 'TransactionBuilder', 'ContractDeployer']
