"""Parse substitution plans from a checkout without installing the package.

Run with: python scripts/parse_plans.py --input data/plan.htm
DSB:      python scripts/parse_plans.py --source dsb --user 123456 --pass secret

See src/subparser/cli.py for all flags and exit codes.
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.subparser.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
