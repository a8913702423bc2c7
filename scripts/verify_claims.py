"""
Claims Verification Script
Publishes the deployed Claims source to the network's block explorer
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.log_setup import setup_logging
from blockchain.claims import verify_main


if __name__ == "__main__":
    setup_logging(log_file="data/logs/verify.log")
    sys.exit(verify_main())
