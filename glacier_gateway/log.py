"""
Logging setup
"""
import logging
from glacier_gateway.consts import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # botocore is chatty at DEBUG
    logging.getLogger('botocore').setLevel(logging.WARNING)
