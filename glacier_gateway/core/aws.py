"""
AWS Client Operations
"""
import logging
from typing import Any, Dict, List, Optional
import boto3
from botocore.config import Config
from glacier_gateway.core.errors import ConfigurationError
from glacier_gateway.core.utils import get_current_config
from glacier_gateway.models import AccountConfig
import glacier_gateway.consts as consts

logger = logging.getLogger(__name__)

def client_config() -> Config:
    """
    Timeouts and retry policy applied to every Glacier call.
    """
    return Config(
        connect_timeout=consts.REMOTE_TIMEOUT,
        read_timeout=consts.REMOTE_TIMEOUT,
        retries={'max_attempts': consts.REMOTE_MAX_ATTEMPTS, 'mode': 'standard'},
    )

def init_client(config: AccountConfig):
    """
    Initializes Glacier Client
    """
    return boto3.client(
        'glacier',
        aws_access_key_id=config.key,
        aws_secret_access_key=config.secret,
        region_name=config.region,
        config=client_config(),
    )

class GlacierService:
    """
    Narrow view of the Glacier API used by the gateway.

    Methods return plain response payloads and let botocore exceptions
    propagate; callers in glacier_gateway.core translate them.
    """

    def __init__(self, client, account_id: str = '-', sns_topic_arn: Optional[str] = None):
        self.client = client
        self.account_id = account_id
        self.sns_topic_arn = sns_topic_arn

    @classmethod
    def from_config(cls, config: AccountConfig) -> "GlacierService":
        return cls(init_client(config), config.account, config.sns_topic_arn)

    def describe_vault(self, vault_name: str) -> Dict[str, Any]:
        response = self.client.describe_vault(accountId=self.account_id, vaultName=vault_name)
        response.pop('ResponseMetadata', None)
        return response

    def create_vault(self, vault_name: str) -> Optional[str]:
        response = self.client.create_vault(accountId=self.account_id, vaultName=vault_name)
        return response.get('location')

    def list_vaults(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {'accountId': self.account_id}
        if limit:
            params['limit'] = limit
        return self.client.list_vaults(**params)['VaultList']

    def delete_vault(self, vault_name: str) -> None:
        self.client.delete_vault(accountId=self.account_id, vaultName=vault_name)

    def upload_archive(self, vault_name: str, body: bytes, description: str, checksum: str) -> Dict[str, Any]:
        """
        Uploads a single archive and returns its id, location and checksum.
        """
        response = self.client.upload_archive(
            accountId=self.account_id,
            vaultName=vault_name,
            archiveDescription=description,
            checksum=checksum,
            body=body,
        )
        return {
            'archiveId': response['archiveId'],
            'location': response.get('location'),
            'checksum': response.get('checksum', checksum),
        }

    def delete_archive(self, vault_name: str, archive_id: str) -> None:
        self.client.delete_archive(
            accountId=self.account_id,
            vaultName=vault_name,
            archiveId=archive_id,
        )

    def initiate_job(self, vault_name: str, job_type: str, archive_id: Optional[str] = None,
                     tier: Optional[str] = None) -> str:
        """
        Initializes a Glacier Job
        """
        params = {
            'Type': job_type,
        }

        if archive_id is not None:
            params['ArchiveId'] = archive_id

        if tier is not None:
            params['Tier'] = tier

        if self.sns_topic_arn is not None:
            params['SNSTopic'] = self.sns_topic_arn

        response = self.client.initiate_job(
            accountId=self.account_id,
            vaultName=vault_name,
            jobParameters=params,
        )
        logger.info("Initiated %s job %s on vault %s", job_type, response['jobId'], vault_name)
        return response['jobId']

    def list_jobs(self, vault_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {'accountId': self.account_id, 'vaultName': vault_name}
        if limit:
            params['limit'] = limit
        return self.client.list_jobs(**params)['JobList']

    def describe_job(self, vault_name: str, job_id: str) -> Dict[str, Any]:
        response = self.client.describe_job(
            accountId=self.account_id,
            vaultName=vault_name,
            jobId=job_id,
        )
        response.pop('ResponseMetadata', None)
        return response

    def get_job_output(self, vault_name: str, job_id: str) -> Dict[str, Any]:
        """
        Returns the streaming body along with the archive description
        and content type Glacier reports for it.
        """
        response = self.client.get_job_output(
            accountId=self.account_id,
            vaultName=vault_name,
            jobId=job_id,
        )
        return {
            'body': response['body'],
            'archiveDescription': response.get('archiveDescription'),
            'contentType': response.get('contentType'),
        }

def get_glacier_service() -> GlacierService:
    """
    Builds a Glacier service from the saved account configuration.
    """
    saved_config = get_current_config()

    if saved_config is None:
        raise ConfigurationError("No configuration found. Please, call POST /configs/ first.")

    return GlacierService.from_config(saved_config)
