"""
Constants and process settings
"""
import os

MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
MONGO_DATABASE = os.environ.get("MONGO_DATABASE", "glacier_gateway")

INDEX_PATH = os.environ.get("GLACIER_GATEWAY_INDEX_PATH", "archive-descriptions.txt")

REMOTE_TIMEOUT = float(os.environ.get("GLACIER_GATEWAY_TIMEOUT", "30"))
REMOTE_MAX_ATTEMPTS = int(os.environ.get("GLACIER_GATEWAY_MAX_ATTEMPTS", "3"))

LOG_LEVEL = os.environ.get("GLACIER_GATEWAY_LOG_LEVEL", "INFO")

# job types
ARCHIVE_RETRIEVAL = "archive-retrieval"
INVENTORY_RETRIEVAL = "inventory-retrieval"

# retrieval tiers
TIER_EXPEDITED = "Expedited"
TIER_STANDARD = "Standard"
TIER_BULK = "Bulk"

# job states
JOB_STATE_INITIATED = "initiated"
JOB_STATE_PENDING = "pending"
JOB_STATE_COMPLETED = "completed"

# probe outcomes
PROBE_FOUND = "found"
PROBE_NOT_FOUND = "not_found"
PROBE_ERROR = "error"

RESOURCE_NOT_FOUND = "ResourceNotFoundException"
REMOTE_VALIDATION_CODES = (
    "InvalidParameterValueException",
    "MissingParameterValueException",
    "PolicyEnforcedException",
    "InsufficientCapacityException",
)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
MAX_DESCRIPTION_LENGTH = 1024
