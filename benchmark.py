# Legacy entry point for backward compatibility
# Use the rpsbench console script instead

import sys
from rpsbench.cli import main


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
