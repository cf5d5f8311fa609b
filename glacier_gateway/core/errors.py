"""
Gateway error taxonomy
"""
from http import HTTPStatus


class GatewayError(Exception):
    """
    Base class for errors surfaced to API callers.
    """
    status_code = HTTPStatus.BAD_REQUEST
    code = "GatewayError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    """Malformed input rejected before any remote call."""
    code = "ValidationError"


class ConfigurationError(GatewayError):
    """No usable account configuration."""
    code = "ConfigurationError"


class NotFoundError(GatewayError):
    status_code = HTTPStatus.NOT_FOUND
    code = "NotFound"


class VaultNotFound(NotFoundError):
    code = "VaultNotFound"

    def __init__(self, vault_name: str):
        super().__init__(f"Vault {vault_name} not found.")
        self.vault_name = vault_name


class JobNotFound(NotFoundError):
    code = "JobNotFound"

    def __init__(self, vault_name: str, job_id: str):
        super().__init__(f"Job {job_id} not found in vault {vault_name}.")
        self.vault_name = vault_name
        self.job_id = job_id


class ArchiveNotFound(NotFoundError):
    code = "ArchiveNotFound"

    def __init__(self, vault_name: str, archive_id: str):
        super().__init__(f"Archive {archive_id} not found in vault {vault_name}.")
        self.vault_name = vault_name
        self.archive_id = archive_id


class VaultAlreadyExists(GatewayError):
    code = "VaultAlreadyExists"

    def __init__(self, vault_name: str):
        super().__init__(f"Vault {vault_name} already exists.")
        self.vault_name = vault_name


class JobNotReady(GatewayError):
    """
    Output requested for a job that has not completed yet.
    """
    code = "JobNotReady"

    def __init__(self, vault_name: str, job_id: str):
        super().__init__(
            f"Job {job_id} in vault {vault_name} is not completed yet. "
            "Poll GET /get-job-description and try again once it completes."
        )
        self.vault_name = vault_name
        self.job_id = job_id


class RemoteError(GatewayError):
    """
    Glacier call failed (network, throttling, malformed response).
    Safe to retry at the caller's discretion.
    """
    code = "RemoteError"

    def __init__(self, message: str, transient: bool = True):
        super().__init__(message)
        self.transient = transient


class RemoteValidationError(RemoteError):
    """Glacier rejected the request parameters."""
    code = "RemoteValidationError"

    def __init__(self, message: str):
        super().__init__(message, transient=False)


class LocalIndexIOError(GatewayError):
    """
    Reading or writing the local description index failed.
    Says nothing about the state of the remote data.
    """
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "LocalIndexIOError"
