"""
Translation of botocore failures into gateway errors
"""
import logging
from contextlib import contextmanager
from typing import Callable, Optional
from botocore.exceptions import BotoCoreError, ClientError
from glacier_gateway.core.errors import GatewayError, RemoteError, RemoteValidationError
from glacier_gateway.core.probes import describe_failure, is_not_found
import glacier_gateway.consts as consts

logger = logging.getLogger(__name__)

@contextmanager
def glacier_errors(action: str, not_found: Optional[Callable[[], GatewayError]] = None):
    """
    Re-raises botocore exceptions from the wrapped block as gateway errors.

    `not_found` builds the error raised for ResourceNotFoundException.
    """
    try:
        yield
    except ClientError as e:
        if not_found is not None and is_not_found(e):
            raise not_found() from e
        code = e.response.get('Error', {}).get('Code')
        logger.warning("%s failed: %s", action, describe_failure(e))
        if code in consts.REMOTE_VALIDATION_CODES:
            raise RemoteValidationError(f"{action} rejected: {describe_failure(e)}") from e
        raise RemoteError(f"{action} failed: {describe_failure(e)}") from e
    except BotoCoreError as e:
        logger.warning("%s failed: %s", action, e)
        raise RemoteError(f"{action} failed: {e}") from e
