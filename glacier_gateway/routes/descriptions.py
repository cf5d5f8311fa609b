"""
Local Archive Descriptions Router
"""

from http import HTTPStatus
from typing import List
from fastapi import APIRouter, Depends
from glacier_gateway.core.index import ArchiveDescriptionIndex
from glacier_gateway.core.utils import require_identifier
from glacier_gateway.dependencies import get_index
from glacier_gateway.models import ArchiveDescription

router = APIRouter()

@router.post('/write-file-archive-description-storage-local',
             status_code=HTTPStatus.CREATED, response_model=ArchiveDescription)
def write_description(record: ArchiveDescription,
                      index: ArchiveDescriptionIndex = Depends(get_index)):
    """
    Appends a description record to the local index.
    """
    require_identifier(record.archive_id, 'archiveId')
    require_identifier(record.vault_name, 'vaultName')
    require_identifier(record.file_name, 'fileName')
    index.append(record)
    return record

@router.get('/read-file-archive-description-storage-local',
            response_model=List[ArchiveDescription])
def read_descriptions(index: ArchiveDescriptionIndex = Depends(get_index)):
    """
    Returns every record of the local index.
    """
    return index.list_all()
