"""
Claims Deployment Script
Deploys the Claims contract to the network given by --network
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.log_setup import setup_logging
from blockchain.claims import main


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
