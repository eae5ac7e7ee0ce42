"""Allow ``python -m slashport``."""

import sys

from slashport.pipeline.converter.cli import main

if __name__ == "__main__":
    sys.exit(main())
