"""
PdfIntake - Python package for assembling pages from several PDF documents

This package provides the intake pipeline that validates submitted PDF
files, lets the user choose pages from multi-page documents, and keeps an
ordered worklist whose snapshots feed a composition stage.
"""

__version__ = "1.0.0"
__license__ = "GPL-3.0"


def main() -> int:
    """Run the command line interface."""
    from pdfintake.cli import main as cli_main

    return cli_main()
