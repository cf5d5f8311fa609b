"""
Retrieval job orchestration

A job is initiated, then polled until Glacier reports it completed; only
then is its output fetched. Completion is never cached locally.
"""
import json
import logging
from typing import List, Optional
from pydantic import ValidationError as PydanticValidationError
from glacier_gateway.core import content_types
from glacier_gateway.core.aws import GlacierService
from glacier_gateway.core.errors import (
    ArchiveNotFound, JobNotFound, JobNotReady, LocalIndexIOError, RemoteError, ValidationError
)
from glacier_gateway.core.index import ArchiveDescriptionIndex
from glacier_gateway.core.probes import ExistenceProbes
from glacier_gateway.core.remote import glacier_errors
from glacier_gateway.core.utils import require_identifier
from glacier_gateway.models import JobOutput, RetrievalJob, Tier, VaultArchive
from glacier_gateway.schemas import GlacierVault
import glacier_gateway.consts as consts

logger = logging.getLogger(__name__)

class RetrievalOrchestrator:
    """
    Drives archive and inventory retrieval jobs.
    """

    def __init__(self, service: GlacierService, probes: ExistenceProbes,
                 index: Optional[ArchiveDescriptionIndex] = None):
        self.service = service
        self.probes = probes
        self.index = index

    def initiate_retrieval(self, vault_name: str, archive_id: str,
                           tier: Tier = Tier.STANDARD) -> RetrievalJob:
        """
        Requests an archive-retrieval job at the given tier.
        """
        require_identifier(archive_id, 'archive_id')
        tier = self._parse_tier(tier)
        self.probes.require_vault(vault_name)

        with glacier_errors(f"Archive retrieval of {archive_id} in vault {vault_name}",
                            not_found=lambda: ArchiveNotFound(vault_name, archive_id)):
            job_id = self.service.initiate_job(
                vault_name, consts.ARCHIVE_RETRIEVAL, archive_id=archive_id, tier=tier.value
            )

        return RetrievalJob(
            job_id=job_id,
            vault_name=vault_name,
            job_type=consts.ARCHIVE_RETRIEVAL,
            archive_id=archive_id,
            tier=tier,
        )

    def initiate_inventory_retrieval(self, vault_name: str) -> RetrievalJob:
        """
        Requests an inventory-retrieval job. Inventory jobs take no tier.
        """
        self.probes.require_vault(vault_name)

        with glacier_errors(f"Inventory retrieval of vault {vault_name}"):
            job_id = self.service.initiate_job(vault_name, consts.INVENTORY_RETRIEVAL)

        return RetrievalJob(
            job_id=job_id,
            vault_name=vault_name,
            job_type=consts.INVENTORY_RETRIEVAL,
        )

    def describe_job(self, vault_name: str, job_id: str) -> RetrievalJob:
        """
        Returns the job as Glacier currently reports it.
        """
        self.probes.require_vault(vault_name)
        detail = self.probes.require_job(vault_name, job_id)
        return RetrievalJob.from_glacier(vault_name, detail)

    def list_jobs(self, vault_name: str, limit: Optional[int] = None) -> List[RetrievalJob]:
        self.probes.require_vault(vault_name)

        with glacier_errors(f"Listing jobs of vault {vault_name}"):
            jobs = self.service.list_jobs(vault_name, limit)

        return [RetrievalJob.from_glacier(vault_name, job) for job in jobs]

    def fetch_output(self, vault_name: str, job_id: str) -> JobOutput:
        """
        Returns the output of a completed job.

        Raises JobNotReady, without asking Glacier for the output, while
        the job is still pending.
        """
        return self._fetch(self.describe_job(vault_name, job_id))

    def read_inventory(self, vault_name: str, job_id: str) -> List[VaultArchive]:
        """
        Downloads a completed inventory job and parses its archive list.
        """
        job = self.describe_job(vault_name, job_id)

        if job.job_type != consts.INVENTORY_RETRIEVAL:
            raise ValidationError(f"Job {job_id} in vault {vault_name} is not an inventory job.")

        output = self._fetch(job)

        try:
            glacier_vault = GlacierVault.model_validate(json.loads(output.body.read()))
        except (ValueError, PydanticValidationError) as e:
            raise RemoteError(
                f"Inventory of vault {vault_name} (job {job_id}) is malformed: {e}"
            ) from e

        return [
            VaultArchive(
                id=arch.ArchiveId,
                description=arch.ArchiveDescription,
                creation_date=arch.CreationDate,
                size=arch.Size,
            )
            for arch in glacier_vault.ArchiveList
        ]

    def _fetch(self, job: RetrievalJob) -> JobOutput:
        vault_name, job_id = job.vault_name, job.job_id

        if not job.completed:
            logger.info("Output of job %s in vault %s requested before completion",
                        job_id, vault_name)
            raise JobNotReady(vault_name, job_id)

        with glacier_errors(f"Fetching output of job {job_id} in vault {vault_name}",
                            not_found=lambda: JobNotFound(vault_name, job_id)):
            output = self.service.get_job_output(vault_name, job_id)

        file_name = self._output_file_name(job, output.get('archiveDescription'))
        return JobOutput(
            body=output['body'],
            content_type=content_types.resolve(file_name),
            file_name=file_name,
        )

    def _output_file_name(self, job: RetrievalJob, archive_description: Optional[str]) -> str:
        if job.job_type == consts.INVENTORY_RETRIEVAL:
            return f"inventory-{job.vault_name}.json"

        if archive_description and archive_description.strip():
            return archive_description.strip()

        if self.index is not None and job.archive_id:
            try:
                record = self.index.find(job.archive_id)
            except LocalIndexIOError:
                record = None
            if record is not None:
                return record.file_name

        return f"archive-{job.job_id}"

    @staticmethod
    def _parse_tier(tier) -> Tier:
        if tier is None:
            return Tier.STANDARD
        try:
            return Tier(tier)
        except ValueError as e:
            raise ValidationError(
                f"Unsupported tier {tier}. Use one of: {', '.join(t.value for t in Tier)}."
            ) from e
