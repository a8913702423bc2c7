"""
Claims Deployment
Deploys the Claims contract to a configured network and verifies it
"""

import time
import asyncio
import argparse
from typing import Dict, List, Optional
from loguru import logger

from utils.network_config import NetworkRegistry, DEFAULT_CONFIG_PATH
from utils.rpc_manager import RPCManager
from utils.deployment_store import DeploymentStore
from utils.explorer_verifier import ExplorerVerifier
from wallet.signer_manager import SignerManager
from blockchain.artifacts import ArtifactStore, check_compiler
from blockchain.contract_deployer import ContractDeployer


CONTRACT_NAME = "Claims"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

CLAIMS_LABEL = "Holders"
# Milliseconds added to the current time for the start timestamp
START_DELAY_MS = 100
CLAIMS_PARAM_A = 10
CLAIMS_PARAM_B = 1000


def claims_constructor_args(deployer_address: str, now_ms: Optional[int] = None) -> List:
    """
    Constructor arguments for Claims, in declaration order

    Args:
        deployer_address: Recipient address (the deploying account)
        now_ms: Current Unix time in milliseconds (None = wall clock)

    Returns:
        [token, label, start timestamp, 10, 1000, recipient]
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    return [
        ZERO_ADDRESS,
        CLAIMS_LABEL,
        now_ms + START_DELAY_MS,
        CLAIMS_PARAM_A,
        CLAIMS_PARAM_B,
        deployer_address
    ]


def deploy_claims(
    network_name: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH,
    rpc_manager: Optional[RPCManager] = None,
    now_ms: Optional[int] = None
) -> Dict:
    """
    Deploy Claims from the network's default signer

    Args:
        network_name: Network to deploy to (None = configured default)
        config_path: Networks config file
        rpc_manager: Connection manager (a fresh one if None)
        now_ms: Clock override for the start timestamp

    Returns:
        Deployment record
    """
    registry = NetworkRegistry(config_path)
    network = registry.get_network(network_name)

    rpc_manager = rpc_manager or RPCManager()
    w3 = rpc_manager.connect(network)

    deployer = SignerManager(w3, network).get_default_signer()
    logger.info(f"Deploying contracts with the account: {deployer.address}")

    artifacts = ArtifactStore(registry.artifacts_dir())
    artifact = artifacts.load_artifact(CONTRACT_NAME)

    build_info = artifacts.load_build_info(artifact)
    if build_info is not None:
        check_compiler(build_info, registry.compiler_versions())
    else:
        logger.warning(f"No build info for {CONTRACT_NAME}, compiler version not checked")

    settings = registry.deployment_settings
    contract_deployer = ContractDeployer(
        w3,
        network,
        gas_multiplier=settings.get('gas_multiplier', 1.2),
        priority_fee_gwei=settings.get('priority_fee_gwei', 1),
        receipt_timeout=settings.get('receipt_timeout', 300)
    )

    constructor_args = claims_constructor_args(deployer.address, now_ms=now_ms)
    record = contract_deployer.deploy(artifact, constructor_args, deployer)

    logger.info(f"Claims address: {record['address']}")

    DeploymentStore(registry.deployments_dir()).save(record)
    return record


async def verify_claims(
    network_name: Optional[str] = None,
    config_path: str = DEFAULT_CONFIG_PATH,
    session=None
) -> bool:
    """
    Verify the recorded Claims deployment on the network's block explorer

    Raises:
        ValueError: No explorer key for the network or nothing deployed
    """
    registry = NetworkRegistry(config_path)
    network_name = network_name or registry.default_network

    api_key = registry.explorer_api_key(network_name)
    if not api_key:
        raise ValueError(f"No explorer API key configured for network '{network_name}'")

    record = DeploymentStore(registry.deployments_dir()).load(network_name, CONTRACT_NAME)
    if record is None:
        raise ValueError(f"{CONTRACT_NAME} has not been deployed to '{network_name}'")

    artifacts = ArtifactStore(registry.artifacts_dir())
    artifact = artifacts.load_artifact(CONTRACT_NAME)
    build_info = artifacts.load_build_info(artifact)
    if build_info is None:
        raise ValueError(f"Build info for {CONTRACT_NAME} not found, recompile first")

    settings = registry.explorer_settings()
    verifier = ExplorerVerifier(
        api_url=settings['api_url'],
        api_key=api_key,
        chain_id=record['chainId'],
        poll_interval=settings.get('poll_interval_seconds', 5),
        max_attempts=settings.get('max_attempts', 20)
    )

    logger.info(f"Verifying {CONTRACT_NAME} at {record['address']} on {network_name}")

    return await verifier.verify(
        record['address'],
        build_info,
        artifact['sourceName'],
        CONTRACT_NAME,
        record['constructorArgsEncoded'],
        session=session
    )


def _parse_args(argv: Optional[List[str]], description: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument('--network', default=None, help="Network name from the config")
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help="Networks config file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Deploy Claims; returns the process exit status"""
    args = _parse_args(argv, "Deploy the Claims contract")

    try:
        deploy_claims(args.network, config_path=args.config)
        return 0
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment failed: {e}")
        return 1


def verify_main(argv: Optional[List[str]] = None) -> int:
    """Verify the deployed Claims contract; returns the process exit status"""
    args = _parse_args(argv, "Verify the Claims contract on the block explorer")

    try:
        asyncio.run(verify_claims(args.network, config_path=args.config))
        return 0
    except Exception as e:
        logger.opt(exception=e).error(f"Verification failed: {e}")
        return 1
