"""
Archive upload and deletion
"""
import logging
from typing import Optional
from botocore.utils import calculate_tree_hash
from io import BytesIO
from glacier_gateway.core.aws import GlacierService
from glacier_gateway.core.errors import ArchiveNotFound, LocalIndexIOError, ValidationError
from glacier_gateway.core.index import ArchiveDescriptionIndex
from glacier_gateway.core.probes import ExistenceProbes
from glacier_gateway.core.remote import glacier_errors
from glacier_gateway.core.utils import require_identifier
from glacier_gateway.models import ArchiveDescription, UploadResult
import glacier_gateway.consts as consts

logger = logging.getLogger(__name__)

def validate_description(description: str) -> str:
    """
    Glacier accepts up to 1024 printable ASCII characters as description.
    """
    if len(description) > consts.MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Archive description must be at most {consts.MAX_DESCRIPTION_LENGTH} characters."
        )
    if any(not (32 <= ord(c) <= 126) for c in description):
        raise ValidationError("Archive description must contain only printable ASCII characters.")
    return description

class ArchiveManager:

    def __init__(self, service: GlacierService, probes: ExistenceProbes,
                 index: ArchiveDescriptionIndex):
        self.service = service
        self.probes = probes
        self.index = index

    def upload_archive(self, vault_name: str, file_name: str, content: bytes,
                       file_description: Optional[str] = None) -> UploadResult:
        """
        Uploads a file and records its description in the local index.

        The index write happens after Glacier confirmed the upload; if it
        fails the upload is still reported, with indexed=False.
        """
        require_identifier(file_name, 'file_name')
        validate_description(file_name)
        self.probes.require_vault(vault_name)

        checksum = calculate_tree_hash(BytesIO(content))

        with glacier_errors(f"Uploading {file_name} to vault {vault_name}"):
            response = self.service.upload_archive(vault_name, content, file_name, checksum)

        archive_id = response['archiveId']
        logger.info("Uploaded %s to vault %s as archive %s", file_name, vault_name, archive_id)

        indexed = True
        try:
            self.index.append(ArchiveDescription(
                file_name=file_name,
                file_description=file_description or "",
                archive_id=archive_id,
                vault_name=vault_name,
            ))
        except LocalIndexIOError as e:
            logger.error("Archive %s uploaded but not indexed: %s", archive_id, e.message)
            indexed = False

        return UploadResult(
            archive_id=archive_id,
            vault_name=vault_name,
            file_name=file_name,
            checksum=response.get('checksum') or checksum,
            location=response.get('location'),
            indexed=indexed,
        )

    def delete_archive(self, vault_name: str, archive_id: str) -> None:
        """
        Deletes an archive. Its local index record is kept.
        """
        require_identifier(archive_id, 'archive_id')
        self.probes.require_vault(vault_name)

        with glacier_errors(f"Deleting archive {archive_id} in vault {vault_name}",
                            not_found=lambda: ArchiveNotFound(vault_name, archive_id)):
            self.service.delete_archive(vault_name, archive_id)

        logger.info("Archive %s deleted from vault %s", archive_id, vault_name)
