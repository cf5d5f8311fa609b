"""
API and domain models
"""
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field
import glacier_gateway.consts as consts

class AccountConfig(BaseModel):
    account: str = "-"
    key: str
    secret: str
    region: str
    sns_topic_arn: Optional[str] = None

class Tier(str, Enum):
    EXPEDITED = consts.TIER_EXPEDITED
    STANDARD = consts.TIER_STANDARD
    BULK = consts.TIER_BULK

class ArchiveDescription(BaseModel):
    """
    One line of the local archive-description index.
    """
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    file_description: str = Field(default="", alias="fileDescription")
    archive_id: str = Field(alias="archiveId")
    vault_name: str = Field(alias="vaultName")

class VaultInfo(BaseModel):
    name: str
    arn: str
    size_in_bytes: Optional[int] = None
    creation_date: str
    number_of_archives: Optional[int] = None
    last_inventory_date: Optional[str] = None

    @classmethod
    def from_glacier(cls, payload: Dict[str, Any]) -> "VaultInfo":
        return cls(
            name=payload['VaultName'],
            arn=payload['VaultARN'],
            size_in_bytes=payload.get('SizeInBytes'),
            creation_date=str(payload['CreationDate']),
            number_of_archives=payload.get('NumberOfArchives'),
            last_inventory_date=payload.get('LastInventoryDate'),
        )

class VaultArchive(BaseModel):
    id: str
    description: str
    creation_date: str
    size: int

class RetrievalJob(BaseModel):
    job_id: str
    vault_name: str
    job_type: str = consts.ARCHIVE_RETRIEVAL
    archive_id: Optional[str] = None
    tier: Optional[Tier] = None
    state: str = consts.JOB_STATE_INITIATED
    completed: bool = False
    status_code: Optional[str] = None
    status_message: Optional[str] = None
    creation_date: Optional[str] = None
    completion_date: Optional[str] = None

    @computed_field
    @property
    def output_available(self) -> bool:
        return self.completed

    @classmethod
    def from_glacier(cls, vault_name: str, payload: Dict[str, Any]) -> "RetrievalJob":
        """
        Builds a job from a DescribeJob / ListJobs entry.
        """
        action = payload.get('Action')
        job_type = consts.INVENTORY_RETRIEVAL if action == 'InventoryRetrieval' \
            else consts.ARCHIVE_RETRIEVAL
        completed = bool(payload.get('Completed'))
        tier = payload.get('Tier')
        return cls(
            job_id=payload['JobId'],
            vault_name=vault_name,
            job_type=job_type,
            archive_id=payload.get('ArchiveId'),
            tier=Tier(tier) if tier in Tier._value2member_map_ else None,
            state=consts.JOB_STATE_COMPLETED if completed else consts.JOB_STATE_PENDING,
            completed=completed,
            status_code=payload.get('StatusCode'),
            status_message=payload.get('StatusMessage'),
            creation_date=payload.get('CreationDate'),
            completion_date=payload.get('CompletionDate'),
        )

class JobOutput(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    body: Any
    content_type: str
    file_name: str

    def iter_bytes(self, chunk_size: int = 1024 * 1024):
        """
        Yields the output body in chunks.
        """
        try:
            iter_chunks = getattr(self.body, 'iter_chunks', None)
            if iter_chunks is not None:
                yield from iter_chunks(chunk_size)
                return
            while True:
                chunk = self.body.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            close = getattr(self.body, 'close', None)
            if close is not None:
                close()

class UploadResult(BaseModel):
    archive_id: str
    vault_name: str
    file_name: str
    checksum: str
    location: Optional[str] = None
    indexed: bool = True

class InitiateJobRequest(BaseModel):
    vault_name: str
    archive_id: str
    # validated by the orchestrator so unsupported tiers are a 400
    tier: str = consts.TIER_STANDARD

class InventoryRetrievalRequest(BaseModel):
    vault_name: str

class AccountConfigView(BaseModel):
    account: str
    key: str
    region: str
    sns_topic_arn: Optional[str] = None
