"""
File extension to MIME type lookup
"""
from typing import Optional
from glacier_gateway.consts import DEFAULT_CONTENT_TYPE

# case-sensitive on purpose: "x.PDF" resolves to the default type
CONTENT_TYPES = {
    'pdf': 'application/pdf',
    'png': 'image/png',
    'jpeg': 'image/jpeg',
    'jpg': 'image/jpeg',
    'html': 'text/html',
    'htm': 'text/html',
    'json': 'application/json',
    'xml': 'application/xml',
    'txt': 'text/plain',
    'csv': 'text/csv',
    'zip': 'application/zip',
    'mp4': 'video/mp4',
    'mp3': 'audio/mpeg',
}

def resolve(file_name: Optional[str]) -> str:
    """
    Returns the MIME type for a file name, or the generic binary type.
    """
    if not file_name or '.' not in file_name:
        return DEFAULT_CONTENT_TYPE

    extension = file_name.rsplit('.', 1)[1]
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
