#!/usr/bin/env python3
"""
devstrap module entry point
Allows running: python3 -m devstrap
"""

from devstrap.cli import main

if __name__ == '__main__':
    main()
