"""
Vaults Router
"""

from http import HTTPStatus
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from glacier_gateway.core.vaults import VaultManager
from glacier_gateway.dependencies import get_vault_manager
from glacier_gateway.models import VaultInfo

router = APIRouter()

@router.post('/create-vault', status_code=HTTPStatus.CREATED, response_model=VaultInfo)
def create_vault(vault_name: str, vaults: VaultManager = Depends(get_vault_manager)):
    """
    Creates a vault if it doesn't exist yet.
    """
    return vaults.create_vault(vault_name)

@router.get('/list-vaults', response_model=List[VaultInfo])
def list_vaults(
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    vaults: VaultManager = Depends(get_vault_manager),
):
    """
    Returns Vaults
    """
    return vaults.list_vaults(limit)

@router.get('/describe-vault', response_model=VaultInfo)
def describe_vault(vault_name: str, vaults: VaultManager = Depends(get_vault_manager)):
    return vaults.describe_vault(vault_name)

@router.delete('/delete-vault')
def delete_vault(vault_name: str, vaults: VaultManager = Depends(get_vault_manager)):
    """
    Deletes an existing vault.
    """
    vaults.delete_vault(vault_name)
    return {'detail': f"Vault {vault_name} deleted."}
