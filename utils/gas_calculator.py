"""
Gas Calculator
Picks fee fields for deployment transactions
"""

from decimal import Decimal
from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class GasCalculator:
    """
    Chooses between legacy and EIP-1559 pricing

    - Fixed gas price configured for the network: legacy gasPrice
    - Latest block carries baseFeePerGas: maxFeePerGas / maxPriorityFeePerGas
    - Otherwise: legacy gasPrice from the node
    """

    def __init__(
        self,
        w3: Web3,
        fixed_gas_price: Optional[int] = None,
        priority_fee_gwei: float = 1
    ):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            fixed_gas_price: Network gas price override in wei
            priority_fee_gwei: Tip used for EIP-1559 transactions
        """
        self.w3 = w3
        self.fixed_gas_price = fixed_gas_price
        self.priority_fee_gwei = priority_fee_gwei

    def get_fee_params(self) -> Dict[str, int]:
        """
        Get fee fields for a transaction

        Returns:
            Either {'gasPrice'} or {'maxFeePerGas', 'maxPriorityFeePerGas'} in wei
        """
        if self.fixed_gas_price is not None:
            logger.debug(f"Using fixed gas price: {self.fixed_gas_price} wei")
            return {'gasPrice': int(self.fixed_gas_price)}

        latest_block = self.w3.eth.get_block('latest')
        base_fee_wei = latest_block.get('baseFeePerGas')

        if base_fee_wei is None:
            gas_price_wei = self.w3.eth.gas_price
            logger.debug(f"Legacy gas price: {self.w3.from_wei(gas_price_wei, 'gwei')} gwei")
            return {'gasPrice': int(gas_price_wei)}

        priority_fee_wei = self.w3.to_wei(Decimal(str(self.priority_fee_gwei)), 'gwei')

        # Max fee = base fee * 2 + priority fee (buffer for fluctuations)
        max_fee_wei = (base_fee_wei * 2) + priority_fee_wei

        logger.debug(
            f"EIP-1559 fees: max {self.w3.from_wei(max_fee_wei, 'gwei')} gwei, "
            f"tip {self.priority_fee_gwei} gwei"
        )

        return {
            'maxFeePerGas': int(max_fee_wei),
            'maxPriorityFeePerGas': int(priority_fee_wei)
        }

    @staticmethod
    def max_cost_wei(gas_limit: int, fee_params: Dict[str, int]) -> int:
        """Upper bound of what a transaction can spend on gas"""
        price = fee_params.get('maxFeePerGas', fee_params.get('gasPrice', 0))
        return gas_limit * price
