import sys

from chromaforge.cli import main

if __name__ == "__main__":
    sys.exit(main())
