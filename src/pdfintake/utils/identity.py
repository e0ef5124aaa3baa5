"""
PdfIntake - Identity Generator

Produces the identifiers assigned to intake attempts.
"""

import uuid


class IdentityGenerator:
    """Issues unique item identities and never repeats one within a session."""

    def __init__(self) -> None:
        self._issued: set[str] = set()

    def new_id(self) -> str:
        """Return a fresh identity."""
        item_id = str(uuid.uuid4())
        while item_id in self._issued:
            item_id = str(uuid.uuid4())
        self._issued.add(item_id)
        return item_id
