"""
Shared fixtures: an in-memory Glacier and the gateway components wired to it.
"""
import itertools
import json
from io import BytesIO

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from glacier_gateway.core.aws import get_glacier_service
from glacier_gateway.core.index import ArchiveDescriptionIndex
from glacier_gateway.core.jobs import RetrievalOrchestrator
from glacier_gateway.core.probes import ExistenceProbes
from glacier_gateway.dependencies import get_index
from glacier_gateway.main import app


def client_error(code, operation, message="error"):
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation)


def not_found(operation, message="not found"):
    return client_error('ResourceNotFoundException', operation, message)


class FakeGlacier:
    """
    Implements the GlacierService methods against dictionaries.
    """

    def __init__(self):
        self.vaults = {}
        self.archives = {}
        self.jobs = {}
        self.calls = []
        self.failures = {}
        self.next_archive_ids = []
        self._ids = itertools.count(1)

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def called(self, name):
        return [args for call, args in self.calls if call == name]

    def describe_vault(self, vault_name):
        self._call('describe_vault', vault_name)
        if vault_name not in self.vaults:
            raise not_found('DescribeVault', f"Vault not found for ARN: {vault_name}")
        return dict(self.vaults[vault_name])

    def create_vault(self, vault_name):
        self._call('create_vault', vault_name)
        self.vaults[vault_name] = {
            'VaultARN': f"arn:aws:glacier:us-east-1:111122223333:vaults/{vault_name}",
            'VaultName': vault_name,
            'CreationDate': '2024-05-01T10:00:00.000Z',
            'NumberOfArchives': 0,
            'SizeInBytes': 0,
        }
        self.archives[vault_name] = {}
        return f"/111122223333/vaults/{vault_name}"

    def list_vaults(self, limit=None):
        self._call('list_vaults', limit)
        vaults = list(self.vaults.values())
        return vaults[:limit] if limit else vaults

    def delete_vault(self, vault_name):
        self._call('delete_vault', vault_name)
        if vault_name not in self.vaults:
            raise not_found('DeleteVault')
        del self.vaults[vault_name]

    def upload_archive(self, vault_name, body, description, checksum):
        self._call('upload_archive', vault_name, description, checksum)
        archive_id = self.next_archive_ids.pop(0) if self.next_archive_ids \
            else f"archive-{next(self._ids)}"
        self.archives[vault_name][archive_id] = (body, description)
        return {'archiveId': archive_id, 'location': f"/archives/{archive_id}", 'checksum': checksum}

    def delete_archive(self, vault_name, archive_id):
        self._call('delete_archive', vault_name, archive_id)
        if archive_id not in self.archives.get(vault_name, {}):
            raise not_found('DeleteArchive')
        del self.archives[vault_name][archive_id]

    def initiate_job(self, vault_name, job_type, archive_id=None, tier=None):
        self._call('initiate_job', vault_name, job_type, archive_id, tier)
        job_id = f"job-{next(self._ids)}"
        self.jobs[(vault_name, job_id)] = {
            'JobId': job_id,
            'Action': 'InventoryRetrieval' if job_type == 'inventory-retrieval' else 'ArchiveRetrieval',
            'ArchiveId': archive_id,
            'VaultARN': self.vaults[vault_name]['VaultARN'],
            'CreationDate': '2024-05-01T11:00:00.000Z',
            'Completed': False,
            'StatusCode': 'InProgress',
            'Tier': tier,
        }
        return job_id

    def complete_job(self, vault_name, job_id):
        job = self.jobs[(vault_name, job_id)]
        job['Completed'] = True
        job['StatusCode'] = 'Succeeded'
        job['CompletionDate'] = '2024-05-01T15:00:00.000Z'

    def list_jobs(self, vault_name, limit=None):
        self._call('list_jobs', vault_name, limit)
        return [dict(job) for (vault, _), job in self.jobs.items() if vault == vault_name]

    def describe_job(self, vault_name, job_id):
        self._call('describe_job', vault_name, job_id)
        if (vault_name, job_id) not in self.jobs:
            raise not_found('DescribeJob', f"The job ID was not found: {job_id}")
        return dict(self.jobs[(vault_name, job_id)])

    def get_job_output(self, vault_name, job_id):
        self._call('get_job_output', vault_name, job_id)
        job = self.jobs[(vault_name, job_id)]

        if job['Action'] == 'InventoryRetrieval':
            inventory = {
                'VaultARN': job['VaultARN'],
                'InventoryDate': '2024-05-01T15:00:00Z',
                'ArchiveList': [
                    {
                        'ArchiveId': archive_id,
                        'ArchiveDescription': description,
                        'CreationDate': '2024-05-01T10:30:00Z',
                        'Size': len(body),
                        'SHA256TreeHash': 'ab' * 32,
                    }
                    for archive_id, (body, description) in self.archives[vault_name].items()
                ],
            }
            return {'body': BytesIO(json.dumps(inventory).encode()),
                    'archiveDescription': None, 'contentType': 'application/json'}

        body, description = self.archives[vault_name][job['ArchiveId']]
        return {'body': BytesIO(body), 'archiveDescription': description,
                'contentType': 'application/octet-stream'}


@pytest.fixture
def glacier():
    return FakeGlacier()


@pytest.fixture
def index(tmp_path):
    return ArchiveDescriptionIndex(str(tmp_path / "archive-descriptions.txt"))


@pytest.fixture
def probes(glacier):
    return ExistenceProbes(glacier)


@pytest.fixture
def orchestrator(glacier, probes, index):
    return RetrievalOrchestrator(glacier, probes, index)


@pytest.fixture
def client(glacier, index):
    app.dependency_overrides[get_glacier_service] = lambda: glacier
    app.dependency_overrides[get_index] = lambda: index
    yield TestClient(app)
    app.dependency_overrides.clear()
