#!/usr/bin/env python3
"""
PdfIntake - Entry point for python -m pdfintake

This module allows the package to be run as a module:
    python -m pdfintake
"""

import sys

from pdfintake import main

if __name__ == "__main__":
    sys.exit(main())
