"""
PdfIntake - Internationalization Module

This module initializes gettext for internationalization support.
"""

import gettext
import os
import sys

TEXT_DOMAIN = "pdfintake"

# Locations where translation catalogs might be installed
_LOCALE_DIRS = [
    "/usr/share/locale",
    os.path.join(sys.prefix, "share", "locale"),
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locale"),
]

for _locale_dir in _LOCALE_DIRS:
    if os.path.isdir(_locale_dir):
        gettext.bindtextdomain(TEXT_DOMAIN, _locale_dir)


def _(text: str) -> str:
    """Translate text in the application domain.

    Falls back to the original text when no catalog is installed.
    """
    return gettext.dgettext(TEXT_DOMAIN, text)

