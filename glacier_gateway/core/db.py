"""
DB Operations
"""
from functools import lru_cache
from pymongo import MongoClient
from glacier_gateway.consts import MONGO_URL, MONGO_DATABASE

@lru_cache(maxsize=1)
def get_database():
    """
    Returns the gateway database. The client connects lazily.
    """
    client = MongoClient(MONGO_URL)
    return client[MONGO_DATABASE]

def get_collection(name: str):
    """
    Returns collection from the specified name.
    """
    return get_database()[name]
