"""
Contract Deployer
Sends contract-creation transactions and records the outcome
"""

import time
from typing import Dict, Sequence
from web3 import Web3
from loguru import logger

from utils.network_config import NetworkConfig
from utils.gas_calculator import GasCalculator
from blockchain.transaction_builder import TransactionBuilder, encode_constructor_args


class ContractDeployer:
    """
    Deploys compiled artifacts to one network
    """

    def __init__(
        self,
        w3: Web3,
        network: NetworkConfig,
        gas_multiplier: float = 1.2,
        priority_fee_gwei: float = 1,
        receipt_timeout: int = 300
    ):
        """
        Initialize Contract Deployer

        Args:
            w3: Connected Web3 instance
            network: Resolved network configuration
            gas_multiplier: Buffer applied to gas estimates
            priority_fee_gwei: Tip for EIP-1559 networks
            receipt_timeout: Seconds to wait for the deployment to be mined
        """
        self.w3 = w3
        self.network = network
        self.receipt_timeout = receipt_timeout

        gas_calculator = GasCalculator(
            w3,
            fixed_gas_price=network.gas_price,
            priority_fee_gwei=priority_fee_gwei
        )
        self.tx_builder = TransactionBuilder(
            w3,
            gas_calculator,
            chain_id=network.chain_id,
            gas_multiplier=gas_multiplier
        )

    def deploy(self, artifact: Dict, constructor_args: Sequence, signer) -> Dict:
        """
        Deploy a contract and wait for it to be mined

        Args:
            artifact: Compiled artifact (abi, bytecode, contractName)
            constructor_args: Positional constructor arguments
            signer: LocalSigner or NodeSigner

        Returns:
            Deployment record

        Raises:
            RuntimeError: Deployment transaction reverted
        """
        contract_name = artifact['contractName']
        abi = artifact['abi']

        Contract = self.w3.eth.contract(abi=abi, bytecode=artifact['bytecode'])

        logger.info(f"Building {contract_name} deployment transaction...")
        transaction = self.tx_builder.build_deployment_tx(
            Contract,
            constructor_args,
            signer.address
        )

        logger.info(f"Sending {contract_name} deployment transaction...")
        tx_hash = signer.send_transaction(self.w3, transaction)

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        receipt = self._wait_for_receipt(tx_hash)

        if receipt['status'] != 1:
            raise RuntimeError(
                f"{contract_name} deployment reverted (tx {tx_hash_hex})"
            )

        record = {
            'contractName': contract_name,
            'sourceName': artifact.get('sourceName'),
            'address': receipt['contractAddress'],
            'transactionHash': tx_hash_hex,
            'blockNumber': receipt['blockNumber'],
            'gasUsed': receipt['gasUsed'],
            'deployer': signer.address,
            'network': self.network.key,
            'chainId': self.network.chain_id,
            'constructorArgs': list(constructor_args),
            'constructorArgsEncoded': encode_constructor_args(abi, constructor_args),
            'deployedAt': int(time.time())
        }

        logger.success(f"{contract_name} deployed at {record['address']}")
        logger.success(f"Gas used: {record['gasUsed']}")

        return record

    def _wait_for_receipt(self, tx_hash: bytes) -> Dict:
        kwargs = {'timeout': self.receipt_timeout}
        if self.network.polling_interval:
            kwargs['poll_latency'] = self.network.polling_interval

        return self.w3.eth.wait_for_transaction_receipt(tx_hash, **kwargs)

