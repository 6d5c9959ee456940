"""Entry point for running the parser from a source checkout."""
import sys
from pathlib import Path

# Ensure the project root is importable
root = Path(__file__).parent.resolve()
sys.path.insert(0, str(root))

from fapiao_parser.cli.main import main

if __name__ == "__main__":
    main()
