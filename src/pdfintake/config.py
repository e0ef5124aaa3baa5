"""
PdfIntake - Configuration Module

This module contains the configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PDF Intake"
APP_ID: Final[str] = "pdfintake"
APP_VERSION: Final[str] = "1.0.0"


# ============================================================================
# Intake Constants
# ============================================================================

DEFAULT_ACCEPTED_MIME_TYPE: Final[str] = "application/pdf"
DEFAULT_TYPE_LABEL: Final[str] = "PDF"

# Page selected automatically for single-page documents (0-indexed)
SINGLE_PAGE_SELECTION: Final[tuple[int, ...]] = (0,)


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfintake")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOGGER_NAME: Final[str] = "PdfIntake"
