"""
Vault and job existence probes

Every vault- or job-scoped operation asks a probe first. The probe turns
whatever Glacier answers into found / not_found / error so callers never
inspect botocore exception types themselves.
"""
import logging
from typing import Any, Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel
from glacier_gateway.core.aws import GlacierService
from glacier_gateway.core.errors import JobNotFound, RemoteError, VaultNotFound
from glacier_gateway.core.utils import require_identifier
import glacier_gateway.consts as consts

logger = logging.getLogger(__name__)

class ProbeResult(BaseModel):
    status: str
    detail: Optional[Dict[str, Any]] = None
    message: Optional[str] = None

    @classmethod
    def found(cls, detail: Dict[str, Any]) -> "ProbeResult":
        return cls(status=consts.PROBE_FOUND, detail=detail)

    @classmethod
    def not_found(cls) -> "ProbeResult":
        return cls(status=consts.PROBE_NOT_FOUND)

    @classmethod
    def error(cls, message: str) -> "ProbeResult":
        return cls(status=consts.PROBE_ERROR, message=message)

    @property
    def is_found(self) -> bool:
        return self.status == consts.PROBE_FOUND

def describe_failure(error: Exception) -> str:
    """
    Human readable cause of a failed Glacier call.
    """
    if isinstance(error, ClientError):
        details = error.response.get('Error', {})
        return f"{details.get('Code', 'Unknown')}: {details.get('Message', str(error))}"
    return str(error)

def is_not_found(error: ClientError) -> bool:
    return error.response.get('Error', {}).get('Code') == consts.RESOURCE_NOT_FOUND

class ExistenceProbes:
    """
    Read-through existence checks against Glacier.
    """

    def __init__(self, service: GlacierService):
        self.service = service

    def probe_vault(self, vault_name: str) -> ProbeResult:
        require_identifier(vault_name, 'vault_name')
        return self._probe(
            f"vault {vault_name}",
            lambda: self.service.describe_vault(vault_name),
            'VaultARN',
        )

    def probe_job(self, vault_name: str, job_id: str) -> ProbeResult:
        require_identifier(vault_name, 'vault_name')
        require_identifier(job_id, 'job_id')
        return self._probe(
            f"job {job_id} in vault {vault_name}",
            lambda: self.service.describe_job(vault_name, job_id),
            'JobId',
        )

    def require_vault(self, vault_name: str) -> Dict[str, Any]:
        """
        Returns the vault description or raises VaultNotFound / RemoteError.
        """
        result = self.probe_vault(vault_name)
        match result.status:
            case consts.PROBE_FOUND:
                return result.detail
            case consts.PROBE_NOT_FOUND:
                raise VaultNotFound(vault_name)
            case _:
                raise RemoteError(f"Could not check vault {vault_name}: {result.message}")

    def require_job(self, vault_name: str, job_id: str) -> Dict[str, Any]:
        """
        Returns the job description or raises JobNotFound / RemoteError.
        """
        result = self.probe_job(vault_name, job_id)
        match result.status:
            case consts.PROBE_FOUND:
                return result.detail
            case consts.PROBE_NOT_FOUND:
                raise JobNotFound(vault_name, job_id)
            case _:
                raise RemoteError(
                    f"Could not check job {job_id} in vault {vault_name}: {result.message}"
                )

    def _probe(self, subject, describe, required_key) -> ProbeResult:
        try:
            detail = describe()
        except ClientError as e:
            if is_not_found(e):
                return ProbeResult.not_found()
            logger.warning("Probe of %s failed: %s", subject, describe_failure(e))
            return ProbeResult.error(describe_failure(e))
        except BotoCoreError as e:
            # timeouts and connection failures never imply absence
            logger.warning("Probe of %s failed: %s", subject, e)
            return ProbeResult.error(str(e))

        if not isinstance(detail, dict) or required_key not in detail:
            logger.warning("Probe of %s returned a malformed response", subject)
            return ProbeResult.error(f"Malformed response while describing {subject}.")

        return ProbeResult.found(detail)
