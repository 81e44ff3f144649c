import sys

from .broadcast import main

if __name__ == "__main__":
    sys.exit(main())
