"""
Signer Manager
Provides the accounts that authorize deployment transactions
"""

from typing import Dict, List
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger

from utils.network_config import NetworkConfig


class LocalSigner:
    """Account whose private key is held by this process"""

    def __init__(self, private_key: str):
        self.account = Account.from_key(private_key)
        self.address = self.account.address

    def send_transaction(self, w3: Web3, transaction: Dict) -> bytes:
        """
        Sign a transaction locally and broadcast it

        Args:
            w3: Web3 instance
            transaction: Fully built transaction dict

        Returns:
            Transaction hash
        """
        try:
            signed_tx = self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

        return w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def __repr__(self):
        return f"LocalSigner({self.address})"


class NodeSigner:
    """Account unlocked on the node itself (local development chains)"""

    def __init__(self, address: str):
        self.address = Web3.to_checksum_address(address)

    def send_transaction(self, w3: Web3, transaction: Dict) -> bytes:
        """Hand the transaction to the node for signing"""
        return w3.eth.send_transaction(transaction)

    def __repr__(self):
        return f"NodeSigner({self.address})"


class SignerManager:
    """
    Resolves signers for a network

    Networks configured with private keys get LocalSigners in key order.
    Networks with remote accounts use whatever the node has unlocked.
    """

    def __init__(self, w3: Web3, network: NetworkConfig):
        """
        Initialize signer manager

        Args:
            w3: Connected Web3 instance
            network: Resolved network configuration
        """
        self.w3 = w3
        self.network = network

    def get_signers(self) -> List:
        """Get every signer available on the network"""
        if self.network.uses_remote_accounts:
            addresses = self.w3.eth.accounts
            return [NodeSigner(address) for address in addresses]

        return [LocalSigner(key) for key in self.network.accounts]

    def get_default_signer(self):
        """
        Get the signer deployments are sent from

        Returns:
            First signer of the network

        Raises:
            RuntimeError: Network has no accounts
        """
        signers = self.get_signers()

        if not signers:
            raise RuntimeError(f"No accounts available on {self.network.name}")

        signer = signers[0]
        logger.debug(f"Default signer on {self.network.key}: {signer.address}")
        return signer

    def get_balance(self, signer) -> Decimal:
        """
        Get native balance of a signer

        Returns:
            Balance in ether units
        """
        balance_wei = self.w3.eth.get_balance(signer.address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))
