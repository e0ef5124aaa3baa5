"""
PdfIntake - Services Package

Intake pipeline services: validation, page selection, the worklist and
snapshot publication.
"""

from pdfintake.services.intake_model import IntakeItem, ItemStatus, SourceFile, SourceHandle
from pdfintake.services.notifications import (
    FailureDialog,
    Notification,
    NotificationCenter,
    NotificationKind,
)
from pdfintake.services.orchestrator import BatchOrchestrator, BatchReport
from pdfintake.services.page_selection import (
    PageSelectionCoordinator,
    SelectionCancelled,
    SelectionCommitted,
    SelectionRequest,
)
from pdfintake.services.publication import PublicationBridge, Snapshot, SnapshotFile
from pdfintake.services.session import IntakeSession
from pdfintake.services.validator import DocumentValidator, ValidationResult
from pdfintake.services.worklist import WorklistStore

__all__ = [
    "BatchOrchestrator",
    "BatchReport",
    "DocumentValidator",
    "FailureDialog",
    "IntakeItem",
    "IntakeSession",
    "ItemStatus",
    "Notification",
    "NotificationCenter",
    "NotificationKind",
    "PageSelectionCoordinator",
    "PublicationBridge",
    "SelectionCancelled",
    "SelectionCommitted",
    "SelectionRequest",
    "Snapshot",
    "SnapshotFile",
    "SourceFile",
    "SourceHandle",
    "ValidationResult",
    "WorklistStore",
]
