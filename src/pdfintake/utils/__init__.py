"""
PdfIntake - Utils Package

Utility modules for the application.
"""

from pdfintake.utils.config_manager import ConfigManager, get_config_manager
from pdfintake.utils.i18n import _
from pdfintake.utils.identity import IdentityGenerator
from pdfintake.utils.logger import logger

__all__ = [
    "logger",
    "_",
    "ConfigManager",
    "get_config_manager",
    "IdentityGenerator",
]
