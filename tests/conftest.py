"""
Shared fixtures: an isolated networks config and a compiled Claims artifact
"""

import json
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]

# Initcode that copies a single STOP byte as runtime code; constructor args are ignored
MINIMAL_BYTECODE = "0x6001600c60003960016000f300"

CLAIMS_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "_token", "type": "address"},
            {"internalType": "string", "name": "_name", "type": "string"},
            {"internalType": "uint256", "name": "_start", "type": "uint256"},
            {"internalType": "uint256", "name": "_period", "type": "uint256"},
            {"internalType": "uint256", "name": "_amount", "type": "uint256"},
            {"internalType": "address", "name": "_recipient", "type": "address"}
        ],
        "stateMutability": "nonpayable",
        "type": "constructor"
    }
]

PRIVATE_KEY = "0x" + "11" * 32

NETWORK_ENV_VARS = [
    'PKEY', 'HARDHAT_RPC',
    'BSC_RPC', 'BSC_CID', 'TBSC_RPC', 'TBSC_CID',
    'POL_RPC', 'POL_CID', 'TPOL_RPC', 'TPOL_CID',
    'ETH_RPC', 'ETH_CID', 'SEP_RPC', 'SEP_CID',
    'ETH_APIKEY', 'BSC_APIKEY', 'POL_APIKEY'
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the networks config reads"""
    for var in NETWORK_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def config_file(tmp_path):
    """Repository networks config with artifact/deployment paths under tmp_path"""
    with open(REPO_ROOT / "config" / "networks.json") as f:
        config = json.load(f)

    config['paths'] = {
        'artifacts': str(tmp_path / "artifacts"),
        'deployments': str(tmp_path / "deployments")
    }

    path = tmp_path / "networks.json"
    path.write_text(json.dumps(config))
    return str(path)


def write_artifact(
    artifacts_dir: Path,
    contract_name: str = "Claims",
    bytecode: str = MINIMAL_BYTECODE,
    solc_version: str = "0.8.20",
    link_references=None,
    with_build_info: bool = True
) -> Path:
    """Lay out an artifact the way the compiler toolchain does"""
    source_dir = artifacts_dir / "contracts" / f"{contract_name}.sol"
    source_dir.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": f"contracts/{contract_name}.sol",
        "abi": CLAIMS_ABI,
        "bytecode": bytecode,
        "deployedBytecode": "0x00",
        "linkReferences": link_references or {},
        "deployedLinkReferences": {}
    }
    artifact_path = source_dir / f"{contract_name}.json"
    artifact_path.write_text(json.dumps(artifact))

    if with_build_info:
        build_info_dir = artifacts_dir / "build-info"
        build_info_dir.mkdir(parents=True, exist_ok=True)
        (build_info_dir / "abc123.json").write_text(json.dumps({
            "_format": "hh-sol-build-info-1",
            "id": "abc123",
            "solcVersion": solc_version,
            "solcLongVersion": f"{solc_version}+commit.a1b79de6",
            "input": {
                "language": "Solidity",
                "sources": {f"contracts/{contract_name}.sol": {"content": "contract Claims {}"}},
                "settings": {"optimizer": {"enabled": False, "runs": 200}}
            }
        }))
        (source_dir / f"{contract_name}.dbg.json").write_text(json.dumps({
            "_format": "hh-sol-dbg-1",
            "buildInfo": "../../build-info/abc123.json"
        }))

    return artifact_path


@pytest.fixture
def claims_artifact(tmp_path):
    """Compiled Claims artifact under tmp_path/artifacts"""
    return write_artifact(tmp_path / "artifacts")
