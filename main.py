import sys

from results_portal.cli import main

if __name__ == "__main__":
    sys.exit(main())
