"""
Request-scoped providers

Each request builds its own Glacier service from the saved account
configuration and passes it explicitly to the components that need it.
"""
from functools import lru_cache
from fastapi import Depends
from glacier_gateway.consts import INDEX_PATH
from glacier_gateway.core.archives import ArchiveManager
from glacier_gateway.core.aws import GlacierService, get_glacier_service
from glacier_gateway.core.index import ArchiveDescriptionIndex
from glacier_gateway.core.jobs import RetrievalOrchestrator
from glacier_gateway.core.probes import ExistenceProbes
from glacier_gateway.core.vaults import VaultManager

@lru_cache(maxsize=1)
def get_index() -> ArchiveDescriptionIndex:
    """
    One index per process so its append lock covers every request.
    """
    return ArchiveDescriptionIndex(INDEX_PATH)

def get_probes(service: GlacierService = Depends(get_glacier_service)) -> ExistenceProbes:
    return ExistenceProbes(service)

def get_vault_manager(
    service: GlacierService = Depends(get_glacier_service),
    probes: ExistenceProbes = Depends(get_probes),
) -> VaultManager:
    return VaultManager(service, probes)

def get_archive_manager(
    service: GlacierService = Depends(get_glacier_service),
    probes: ExistenceProbes = Depends(get_probes),
    index: ArchiveDescriptionIndex = Depends(get_index),
) -> ArchiveManager:
    return ArchiveManager(service, probes, index)

def get_orchestrator(
    service: GlacierService = Depends(get_glacier_service),
    probes: ExistenceProbes = Depends(get_probes),
    index: ArchiveDescriptionIndex = Depends(get_index),
) -> RetrievalOrchestrator:
    return RetrievalOrchestrator(service, probes, index)
