"""
Contract Deployment Wrapper
Runs scripts/deploy_claims.py, forwarding arguments (e.g. --network bsc)
"""

import subprocess
import sys

if __name__ == "__main__":
    print("=" * 70)
    print("Claims Contract Deployment")
    print("=" * 70)
    print()

    result = subprocess.run(
        [sys.executable, "scripts/deploy_claims.py", *sys.argv[1:]],
        cwd="."
    )

    sys.exit(result.returncode)
