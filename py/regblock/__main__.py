import sys

from .cli import main

# Entry point when running with python -m regblock
if __name__ == '__main__':
    sys.exit(main())
