"""
Glacier inventory payload
"""
from typing import List
from pydantic import BaseModel

class Archive(BaseModel):
    ArchiveId: str
    ArchiveDescription: str = ""
    CreationDate: str
    Size: int
    SHA256TreeHash: str

class GlacierVault(BaseModel):
    VaultARN: str
    InventoryDate: str
    ArchiveList: List[Archive]
