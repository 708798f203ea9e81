import os
import sys

# Add src to sys.path to allow running without installing the package
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))
from simpletodo.cli import main

if __name__ == "__main__":
    sys.exit(main())
