"""
Artifact Store
Reads compiled contract artifacts and their build info
"""

import os
import json
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger


class ArtifactStore:
    """
    Compiled contract artifacts produced by the external toolchain

    Layout:
        <artifacts>/contracts/<Source>.sol/<Name>.json      abi + bytecode
        <artifacts>/contracts/<Source>.sol/<Name>.dbg.json  build info pointer
        <artifacts>/build-info/<id>.json                    solc version + input
    """

    def __init__(self, artifacts_dir: str = "artifacts"):
        self.artifacts_dir = Path(artifacts_dir)

    def _find_artifact_paths(self, contract_name: str) -> List[Path]:
        if not self.artifacts_dir.exists():
            return []

        return sorted(
            path for path in self.artifacts_dir.rglob(f"{contract_name}.json")
            if 'build-info' not in path.parts
        )

    def load_artifact(self, contract_name: str) -> Dict:
        """
        Load a deployable artifact

        Args:
            contract_name: Contract name, e.g. "Claims"

        Returns:
            Artifact dict with an extra 'artifactPath' entry

        Raises:
            FileNotFoundError: No artifact for the contract
            ValueError: Ambiguous name, abstract contract or unlinked libraries
        """
        paths = self._find_artifact_paths(contract_name)

        if not paths:
            raise FileNotFoundError(
                f"Artifact for {contract_name} not found under {self.artifacts_dir}. "
                f"Compile the contracts first"
            )

        if len(paths) > 1:
            raise ValueError(
                f"Multiple artifacts named {contract_name}: "
                f"{', '.join(str(p) for p in paths)}"
            )

        path = paths[0]
        with open(path, 'r') as f:
            artifact = json.load(f)

        bytecode = artifact.get('bytecode', '0x')
        if bytecode in ('', '0x'):
            raise ValueError(
                f"{contract_name} has no bytecode (abstract contract or interface)"
            )

        if artifact.get('linkReferences'):
            libraries = ', '.join(
                name
                for source in artifact['linkReferences'].values()
                for name in source
            )
            raise ValueError(f"{contract_name} needs linked libraries: {libraries}")

        artifact['artifactPath'] = str(path)
        logger.debug(f"Loaded artifact {path}")
        return artifact

    def load_build_info(self, artifact: Dict) -> Optional[Dict]:
        """
        Load the build info an artifact was produced from

        Returns:
            Build info dict, or None when the debug file is absent
        """
        artifact_path = Path(artifact['artifactPath'])
        dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")

        if not dbg_path.exists():
            logger.debug(f"No debug file for {artifact_path}")
            return None

        with open(dbg_path, 'r') as f:
            dbg = json.load(f)

        build_info_path = os.path.normpath(dbg_path.parent / dbg['buildInfo'])

        with open(build_info_path, 'r') as f:
            return json.load(f)


def check_compiler(build_info: Dict, allowed_versions: List[str]):
    """
    Ensure an artifact was compiled by a configured solc version

    Raises:
        ValueError: Version not in the configured list
    """
    version = build_info.get('solcVersion')

    if version not in allowed_versions:
        raise ValueError(
            f"Artifact compiled with solc {version}, "
            f"configured compilers: {', '.join(allowed_versions)}"
        )
