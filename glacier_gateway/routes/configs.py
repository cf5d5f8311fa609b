"""
Configs Router
"""

from http import HTTPStatus
from fastapi import APIRouter, HTTPException
from glacier_gateway.core.aws import GlacierService
from glacier_gateway.core.db import get_collection
from glacier_gateway.core.errors import ConfigurationError
from glacier_gateway.core.remote import glacier_errors
from glacier_gateway.core.utils import get_current_config
from glacier_gateway.models import AccountConfig, AccountConfigView

router = APIRouter()

@router.post('/', status_code=HTTPStatus.CREATED, response_model=AccountConfigView)
def post_configs(config: AccountConfig):
    """
    Create Config
    """
    collection = get_collection('config')

    if collection.find_one() is not None:
        raise ConfigurationError("Account already set.")

    verify_client_config(config)
    collection.insert_one(config.model_dump())
    return config

@router.put('/', status_code=HTTPStatus.OK, response_model=AccountConfigView)
def put_configs(config: AccountConfig):
    """
    Replace Config
    """
    collection = get_collection('config')
    saved_config = collection.find_one()

    if saved_config is None:
        raise ConfigurationError("There's no config set yet.")

    verify_client_config(config)
    collection.update_one(
        {"_id": saved_config['_id']},
        {"$set": config.model_dump()}
    )
    return config

@router.get('/', response_model=AccountConfigView)
def get_configs():
    """
    Returns AWS Account configuration if set
    """
    saved_config = get_current_config()

    if saved_config is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="No configuration found.")

    return saved_config

def verify_client_config(config: AccountConfig):
    """
    Tests AWS credentials
    """
    with glacier_errors("Validating AWS credentials"):
        GlacierService.from_config(config).list_vaults(limit=1)
