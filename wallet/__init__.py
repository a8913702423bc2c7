"""
Wallet Package
Signing identities for deployment transactions
"""

from .signer_manager import SignerManager, LocalSigner, NodeSigner

__all__ = ['SignerManager', 'LocalSigner', 'NodeSigner']
