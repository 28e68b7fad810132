"""
Web-Socketizer - Entry point for CLI execution.

Allows running the package as a module: python -m websocketizer
"""

from websocketizer.cli import main
import sys

if __name__ == '__main__':
    sys.exit(main())
