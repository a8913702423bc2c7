"""
Transaction Builder
Constructs contract-creation transactions
"""

from typing import Dict, List, Sequence
from web3 import Web3
from eth_abi import encode
from loguru import logger

from utils.gas_calculator import GasCalculator


class TransactionBuilder:
    """
    Builds deployment transactions ready for signing
    """

    def __init__(
        self,
        w3: Web3,
        gas_calculator: GasCalculator,
        chain_id: int,
        gas_multiplier: float = 1.2
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_calculator: Source of fee fields
            chain_id: Chain id stamped on every transaction
            gas_multiplier: Buffer applied to the gas estimate
        """
        self.w3 = w3
        self.gas_calculator = gas_calculator
        self.chain_id = chain_id
        self.gas_multiplier = gas_multiplier

    def build_deployment_tx(self, contract, constructor_args: Sequence, sender: str) -> Dict:
        """
        Build a contract-creation transaction

        Args:
            contract: Contract factory (w3.eth.contract(abi=..., bytecode=...))
            constructor_args: Positional constructor arguments
            sender: Deployer address

        Returns:
            Transaction dict
        """
        constructor = contract.constructor(*constructor_args)

        nonce = self.w3.eth.get_transaction_count(sender, 'pending')

        gas_estimate = constructor.estimate_gas({'from': sender})
        gas_limit = int(gas_estimate * self.gas_multiplier)

        fee_params = self.gas_calculator.get_fee_params()

        logger.info(f"Gas limit: {gas_limit} (estimate {gas_estimate})")

        transaction = constructor.build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'chainId': self.chain_id,
            **fee_params
        })

        max_cost = GasCalculator.max_cost_wei(gas_limit, fee_params)
        logger.info(f"Maximum deployment cost: {self.w3.from_wei(max_cost, 'ether')}")

        return transaction


def _abi_type(param: Dict) -> str:
    """Canonical type string for an ABI parameter, expanding tuples"""
    abi_type = param['type']

    if abi_type.startswith('tuple'):
        components = ','.join(_abi_type(c) for c in param['components'])
        return f"({components}){abi_type[len('tuple'):]}"

    return abi_type


def encode_constructor_args(abi: List[Dict], constructor_args: Sequence) -> str:
    """
    ABI-encode constructor arguments

    Args:
        abi: Contract ABI
        constructor_args: Positional constructor arguments

    Returns:
        Hex string without 0x prefix (empty when there is no constructor)
    """
    constructor_abi = next(
        (item for item in abi if item.get('type') == 'constructor'),
        None
    )

    inputs = constructor_abi.get('inputs', []) if constructor_abi else []

    if len(inputs) != len(constructor_args):
        raise ValueError(
            f"Constructor takes {len(inputs)} arguments, got {len(constructor_args)}"
        )

    if not inputs:
        return ''

    types = [_abi_type(param) for param in inputs]
    return encode(types, list(constructor_args)).hex()
