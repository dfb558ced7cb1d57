"""Allow ``python -m divirpc``."""

import sys

from divirpc.cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
