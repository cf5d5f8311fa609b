"""
Commom Operations
"""
from typing import Optional
from glacier_gateway.models import AccountConfig
from glacier_gateway.core.db import get_collection
from glacier_gateway.core.errors import ValidationError

def get_current_config() -> Optional[AccountConfig]:
    """
    Returns current config if set.
    """
    collection = get_collection('config')
    saved_config = collection.find_one()

    if saved_config is None:
        return None

    saved_config.pop('_id', None)
    return AccountConfig.model_validate(saved_config)

def require_identifier(value: Optional[str], name: str) -> str:
    """
    Rejects empty or whitespace-only identifiers.
    """
    if value is None or not value.strip():
        raise ValidationError(f"{name} must not be empty.")
    return value
