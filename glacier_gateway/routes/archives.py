"""
Archives Router
"""

from http import HTTPStatus
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from glacier_gateway.core.archives import ArchiveManager
from glacier_gateway.dependencies import get_archive_manager
from glacier_gateway.models import UploadResult

router = APIRouter()

@router.post('/upload-archive', status_code=HTTPStatus.CREATED, response_model=UploadResult)
def upload_archive(
    vault_name: str = Form(...),
    file: UploadFile = File(...),
    description: Optional[str] = Form(default=None),
    archives: ArchiveManager = Depends(get_archive_manager),
):
    """
    Uploads a file as a new archive and indexes its description locally.
    """
    content = file.file.read()
    return archives.upload_archive(vault_name, file.filename, content, description)

@router.delete('/delete-archive')
def delete_archive(
    vault_name: str,
    archive_id: str,
    archives: ArchiveManager = Depends(get_archive_manager),
):
    archives.delete_archive(vault_name, archive_id)
    return {'detail': f"Archive {archive_id} deleted from vault {vault_name}."}
