"""
Vault lifecycle
"""
import logging
from typing import List, Optional
from glacier_gateway.core.aws import GlacierService
from glacier_gateway.core.errors import RemoteError, VaultAlreadyExists, VaultNotFound
from glacier_gateway.core.probes import ExistenceProbes
from glacier_gateway.core.remote import glacier_errors
import glacier_gateway.consts as consts
from glacier_gateway.models import VaultInfo

logger = logging.getLogger(__name__)

class VaultManager:

    def __init__(self, service: GlacierService, probes: ExistenceProbes):
        self.service = service
        self.probes = probes

    def create_vault(self, vault_name: str) -> VaultInfo:
        """
        Creates a vault that doesn't exist yet.
        """
        result = self.probes.probe_vault(vault_name)
        match result.status:
            case consts.PROBE_FOUND:
                raise VaultAlreadyExists(vault_name)
            case consts.PROBE_ERROR:
                raise RemoteError(f"Vault {vault_name} not created: {result.message}")

        with glacier_errors(f"Creating vault {vault_name}"):
            self.service.create_vault(vault_name)

        logger.info("Vault %s created", vault_name)
        return self.describe_vault(vault_name)

    def describe_vault(self, vault_name: str) -> VaultInfo:
        return VaultInfo.from_glacier(self.probes.require_vault(vault_name))

    def list_vaults(self, limit: Optional[int] = None) -> List[VaultInfo]:
        with glacier_errors("Listing vaults"):
            vaults = self.service.list_vaults(limit)
        return [VaultInfo.from_glacier(v) for v in vaults]

    def delete_vault(self, vault_name: str) -> None:
        """
        Deletes an existing vault. Glacier refuses non-empty vaults.
        """
        self.probes.require_vault(vault_name)

        with glacier_errors(f"Deleting vault {vault_name}",
                            not_found=lambda: VaultNotFound(vault_name)):
            self.service.delete_vault(vault_name)

        logger.info("Vault %s deleted", vault_name)
