"""
Explorer Verifier
Publishes contract source to Etherscan-compatible block explorers
"""

import json
import asyncio
from typing import Dict, Optional
import aiohttp
from loguru import logger


class ExplorerVerifier:
    """
    Source verification through the Etherscan v2 API

    Submits the solc standard JSON input of a build, then polls the
    verification status until the explorer accepts or rejects it.
    """

    ALREADY_VERIFIED = ('already verified',)
    PENDING = ('pending in queue', 'in progress')

    def __init__(
        self,
        api_url: str,
        api_key: str,
        chain_id: int,
        poll_interval: float = 5,
        max_attempts: int = 20,
        request_timeout: float = 30
    ):
        """
        Initialize Explorer Verifier

        Args:
            api_url: Explorer API endpoint
            api_key: Explorer API key
            chain_id: Chain the contract lives on
            poll_interval: Seconds between status checks
            max_attempts: Status checks before giving up
            request_timeout: Per-request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.chain_id = chain_id
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.timeout = aiohttp.ClientTimeout(total=request_timeout)

    def _is_already_verified(self, message: str) -> bool:
        return any(marker in message.lower() for marker in self.ALREADY_VERIFIED)

    async def submit(
        self,
        session: aiohttp.ClientSession,
        address: str,
        build_info: Dict,
        source_name: str,
        contract_name: str,
        constructor_args_encoded: str
    ) -> Optional[str]:
        """
        Submit source code for verification

        Args:
            session: aiohttp session
            address: Deployed contract address
            build_info: Build info with solcLongVersion and standard JSON input
            source_name: Source file, e.g. contracts/Claims.sol
            contract_name: Contract name, e.g. Claims
            constructor_args_encoded: ABI-encoded constructor args (hex, no 0x)

        Returns:
            Verification GUID, or None if the contract is already verified

        Raises:
            RuntimeError: Explorer rejected the submission
        """
        payload = {
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'verifysourcecode',
            'contractaddress': address,
            'sourceCode': json.dumps(build_info['input']),
            'codeformat': 'solidity-standard-json-input',
            'contractname': f"{source_name}:{contract_name}",
            'compilerversion': f"v{build_info['solcLongVersion']}",
            'constructorArguements': constructor_args_encoded
        }

        async with session.post(
            self.api_url,
            params={'chainid': self.chain_id},
            data=payload,
            timeout=self.timeout
        ) as response:
            data = await response.json(content_type=None)

        result = str(data.get('result', ''))

        if data.get('status') == '1':
            logger.info(f"Verification submitted for {address}: {result}")
            return result

        if self._is_already_verified(result):
            logger.info(f"{address} is already verified")
            return None

        raise RuntimeError(f"Explorer rejected verification request: {result}")

    async def check_status(self, session: aiohttp.ClientSession, guid: str) -> bool:
        """
        Check a submitted verification

        Returns:
            True once verified, False while pending

        Raises:
            RuntimeError: Verification failed
        """
        params = {
            'chainid': self.chain_id,
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'checkverifystatus',
            'guid': guid
        }

        async with session.get(self.api_url, params=params, timeout=self.timeout) as response:
            data = await response.json(content_type=None)

        result = str(data.get('result', ''))
        lowered = result.lower()

        if any(marker in lowered for marker in self.PENDING):
            logger.debug(f"Verification {guid}: {result}")
            return False

        if data.get('status') == '1' or self._is_already_verified(result):
            return True

        raise RuntimeError(f"Verification failed: {result}")

    async def verify(
        self,
        address: str,
        build_info: Dict,
        source_name: str,
        contract_name: str,
        constructor_args_encoded: str,
        session: Optional[aiohttp.ClientSession] = None
    ) -> bool:
        """
        Submit and wait for verification

        Returns:
            True when the explorer shows the source as verified

        Raises:
            RuntimeError: Rejected, failed or still pending after max_attempts
        """
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self.verify(
                    address,
                    build_info,
                    source_name,
                    contract_name,
                    constructor_args_encoded,
                    session=own_session
                )

        guid = await self.submit(
            session,
            address,
            build_info,
            source_name,
            contract_name,
            constructor_args_encoded
        )

        if guid is None:
            return True

        for _ in range(self.max_attempts):
            await asyncio.sleep(self.poll_interval)

            if await self.check_status(session, guid):
                logger.success(f"Source verified for {contract_name} at {address}")
                return True

        raise RuntimeError(
            f"Verification {guid} still pending after {self.max_attempts} checks"
        )
