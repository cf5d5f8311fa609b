"""
Local archive-description index

Glacier keeps only an opaque description string per archive and can't be
queried by it, so every upload also appends a record here mapping the
archive id back to its file name and vault.
"""
import logging
import os
import threading
from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError
from glacier_gateway.core.errors import LocalIndexIOError
from glacier_gateway.models import ArchiveDescription

logger = logging.getLogger(__name__)

class ArchiveDescriptionIndex:
    """
    Append-only JSON-lines log of ArchiveDescription records.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def append(self, record: ArchiveDescription) -> None:
        """
        Writes one record as a single line at the end of the log.
        """
        line = record.model_dump_json(by_alias=True) + '\n'

        with self._lock:
            try:
                with open(self.path, 'a', encoding='utf-8') as log:
                    log.write(line)
                    log.flush()
            except OSError as e:
                logger.error("Could not append archive %s to index %s: %s",
                             record.archive_id, self.path, e)
                raise LocalIndexIOError(
                    f"Could not write description of archive {record.archive_id} "
                    f"to local index: {e}"
                ) from e

        logger.debug("Indexed archive %s of vault %s", record.archive_id, record.vault_name)

    def list_all(self) -> List[ArchiveDescription]:
        """
        Returns every readable record in log order. Malformed lines are skipped.
        """
        if not os.path.exists(self.path):
            return []

        records = []
        try:
            with open(self.path, 'r', encoding='utf-8', errors='replace') as log:
                for line_number, line in enumerate(log, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        records.append(ArchiveDescription.model_validate_json(line))
                    except PydanticValidationError as e:
                        logger.warning("Skipping malformed index entry at %s:%d: %s",
                                       self.path, line_number, e.errors()[0]['msg'])
        except OSError as e:
            logger.error("Could not read index %s: %s", self.path, e)
            raise LocalIndexIOError(f"Could not read local index: {e}") from e

        return records

    def find(self, archive_id: str) -> Optional[ArchiveDescription]:
        """
        Returns the latest record for an archive id, if any.
        """
        match = None
        for record in self.list_all():
            if record.archive_id == archive_id:
                match = record
        return match
