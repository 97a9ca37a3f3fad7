#!/usr/bin/env python3
"""
Entry point for running marketplace_cli as a module.
"""

import sys

from marketplace_cli.cli import main

if __name__ == '__main__':
    sys.exit(main())
