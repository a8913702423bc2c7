"""
System Check Script
Verifies configuration and connectivity for a network before deploying
"""

import os
import sys
import json
import argparse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger

from utils.network_config import NetworkRegistry, DEFAULT_CONFIG_PATH
from utils.rpc_manager import RPCManager
from utils.deployment_store import DeploymentStore
from wallet.signer_manager import SignerManager
from blockchain.artifacts import ArtifactStore, check_compiler
from blockchain.claims import CONTRACT_NAME


def check_configuration_file(state):
    """Check the networks config exists and parses"""
    logger.info("Checking configuration file...")

    config_path = state['config_path']

    if not os.path.exists(config_path):
        logger.error(f"  ✗ {config_path} not found")
        return False

    try:
        state['registry'] = NetworkRegistry(config_path)
    except Exception as e:
        logger.error(f"  ✗ {config_path}: {e}")
        return False

    logger.success(f"  ✓ {config_path}")
    return True


def check_environment_variables(state):
    """Check the network's environment variables are set"""
    logger.info("Checking environment variables...")

    registry = state.get('registry')
    if registry is None:
        return False

    try:
        missing = registry.missing_env_vars(state['network_name'])
    except ValueError as e:
        logger.error(f"  ✗ {e}")
        return False

    if missing:
        logger.error(f"Missing environment variables: {', '.join(missing)}")
        return False

    state['network'] = registry.get_network(state['network_name'])
    logger.success("✓ All environment variables set")
    return True


def check_rpc_connection(state):
    """Check the RPC endpoint answers with the configured chain id"""
    logger.info("Checking RPC connection...")

    network = state.get('network')
    if network is None:
        logger.warning("  Network not resolved - skipping")
        return False

    try:
        w3 = RPCManager().connect(network)
        block = w3.eth.block_number
        logger.success(f"  ✓ {network.name}: Connected (Block: {block})")
        state['w3'] = w3
        return True
    except Exception as e:
        logger.error(f"  ✗ {network.name}: {e}")
        return False


def check_deployer_balance(state):
    """Check the deployer account can pay for gas"""
    logger.info("Checking deployer balance...")

    w3 = state.get('w3')
    if w3 is None:
        logger.warning("  No connection - skipping balance check")
        return False

    try:
        signer_manager = SignerManager(w3, state['network'])
        signer = signer_manager.get_default_signer()
        balance = signer_manager.get_balance(signer)
    except Exception as e:
        logger.error(f"  Error checking deployer balance: {e}")
        return False

    logger.info(f"  Deployer {signer.address}: {balance:.4f}")

    if balance <= 0:
        logger.error("  ✗ Deployer has no funds for gas")
        return False

    logger.success("  ✓ Deployer balance available")
    return True


def check_artifact(state):
    """Check the Claims artifact exists and used a configured compiler"""
    logger.info("Checking compiled artifact...")

    registry = state.get('registry')
    if registry is None:
        return False

    artifacts = ArtifactStore(registry.artifacts_dir())

    try:
        artifact = artifacts.load_artifact(CONTRACT_NAME)
        build_info = artifacts.load_build_info(artifact)

        if build_info is None:
            logger.warning("  Build info missing - compiler version not checked")
        else:
            check_compiler(build_info, registry.compiler_versions())
            logger.info(f"  Compiled with solc {build_info['solcVersion']}")
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"  ✗ {e}")
        return False

    logger.success(f"  ✓ {artifact['artifactPath']}")
    return True


def check_existing_deployment(state):
    """Check a recorded deployment still has code on chain"""
    logger.info("Checking existing deployment...")

    registry = state.get('registry')
    if registry is None:
        return False

    record = DeploymentStore(registry.deployments_dir()).load(
        state['network_name'], CONTRACT_NAME
    )

    if record is None:
        logger.info("  Contract not deployed yet")
        logger.info(f"  Run: python deploy.py --network {state['network_name']}")
        return True

    w3 = state.get('w3')
    if w3 is None:
        return True

    code = w3.eth.get_code(record['address'])

    if len(code) == 0:
        logger.error(f"  ✗ No contract at {record['address']}")
        return False

    logger.success(f"  ✓ Contract deployed at {record['address']}")
    return True


def main(argv=None):
    """Run all system checks"""
    parser = argparse.ArgumentParser(description="Pre-deployment system check")
    parser.add_argument('--network', default=None)
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args(argv)

    state = {'config_path': args.config, 'network_name': args.network}

    if state['network_name'] is None and os.path.exists(args.config):
        with open(args.config, 'r') as f:
            state['network_name'] = json.load(f).get('default_network', 'hardhat')

    logger.info("=" * 70)
    logger.info(f"Deployment System Check ({state['network_name']})")
    logger.info("=" * 70)

    checks = [
        ("Configuration File", check_configuration_file),
        ("Environment Variables", check_environment_variables),
        ("RPC Connection", check_rpc_connection),
        ("Deployer Balance", check_deployer_balance),
        ("Compiled Artifact", check_artifact),
        ("Existing Deployment", check_existing_deployment)
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func(state)
            results.append((name, result))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("=" * 70)
        logger.success("✅ Ready to deploy!")
        logger.success("=" * 70)
        return 0
    else:
        logger.error("=" * 70)
        logger.error("❌ Not ready - fix issues above")
        logger.error("=" * 70)
        return 1


if __name__ == "__main__":
    sys.exit(main())
