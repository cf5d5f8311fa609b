"""
Jobs Router
"""

from http import HTTPStatus
from typing import List, Optional
from urllib.parse import quote
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from glacier_gateway.core.jobs import RetrievalOrchestrator
from glacier_gateway.dependencies import get_orchestrator
from glacier_gateway.models import InitiateJobRequest, RetrievalJob, VaultArchive

router = APIRouter()

def content_disposition(file_name: str) -> str:
    # control characters are not allowed in header values
    if all(32 <= ord(c) <= 126 for c in file_name):
        return 'attachment; filename="{}"'.format(file_name.replace('"', ''))
    return f"attachment; filename*=utf-8''{quote(file_name, safe='')}"

@router.post('/initiate-job', status_code=HTTPStatus.CREATED, response_model=RetrievalJob)
def initiate_job(body: InitiateJobRequest,
                 jobs: RetrievalOrchestrator = Depends(get_orchestrator)):
    """
    Initializes an archive-retrieval job.
    """
    return jobs.initiate_retrieval(body.vault_name, body.archive_id, body.tier)

@router.get('/inventory-retrieval-by-vault-name', response_model=RetrievalJob)
def inventory_retrieval(vault_name: str,
                        jobs: RetrievalOrchestrator = Depends(get_orchestrator)):
    """
    Initializes a inventory-retrieval job.
    """
    return jobs.initiate_inventory_retrieval(vault_name)

@router.get('/list-jobs', response_model=List[RetrievalJob])
def list_jobs(
    vault_name: str,
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    jobs: RetrievalOrchestrator = Depends(get_orchestrator),
):
    return jobs.list_jobs(vault_name, limit)

@router.get('/get-job-description', response_model=RetrievalJob)
def get_job_description(vault_name: str, job_id: str,
                        jobs: RetrievalOrchestrator = Depends(get_orchestrator)):
    """
    Returns the current state of a job.
    """
    return jobs.describe_job(vault_name, job_id)

@router.get('/get-archive')
def get_archive(vault_name: str, job_id: str,
                jobs: RetrievalOrchestrator = Depends(get_orchestrator)):
    """
    Streams the output of a completed job.
    """
    output = jobs.fetch_output(vault_name, job_id)
    return StreamingResponse(
        output.iter_bytes(),
        media_type=output.content_type,
        headers={'Content-Disposition': content_disposition(output.file_name)},
    )

@router.get('/get-inventory', response_model=List[VaultArchive])
def get_inventory(vault_name: str, job_id: str,
                  jobs: RetrievalOrchestrator = Depends(get_orchestrator)):
    """
    Downloads inventory if ready.
    """
    return jobs.read_inventory(vault_name, job_id)
