"""
Object storage upload for deployment files.

Files are streamed to S3 under ``{org_id}/{file name}`` and hashed on the way
so the digest can be attached to the product entry that references them.
"""

import hashlib
import os
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import StorageConfig
from .exceptions import UploadError
from .logging_config import get_logger
from .models import HASH_ALGO_SHA1, HASH_ALGO_SHA256

logger = get_logger('upload')

HASH_FUNCTIONS = {
    HASH_ALGO_SHA1: hashlib.sha1,
    HASH_ALGO_SHA256: hashlib.sha256,
}

CHUNK_SIZE = 1024 * 1024


def hash_file(file_path: str, hash_algo: str = HASH_ALGO_SHA1) -> str:
    """
    Compute the hex digest of a file without loading it into memory.

    Raises:
        UploadError: If the algorithm is unsupported
        OSError: If the file cannot be read
    """
    if hash_algo not in HASH_FUNCTIONS:
        raise UploadError(f"unsupported hash algorithm {hash_algo}")
    digest = HASH_FUNCTIONS[hash_algo]()
    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.hexdigest()


class S3Uploader:
    """Uploads files into the marketplace storage bucket."""

    def __init__(self, region: str, hash_algo: str = HASH_ALGO_SHA1, org_id: Optional[str] = None,
                 client=None):
        """
        Args:
            region: Bucket region
            hash_algo: Digest recorded for uploaded files (SHA1 or SHA256)
            org_id: Publisher organization id, used as the key prefix
            client: boto3 S3 client; created from the default credential chain if omitted
        """
        if hash_algo not in HASH_FUNCTIONS:
            raise UploadError(f"unsupported hash algorithm {hash_algo}")
        self.region = region
        self.hash_algo = hash_algo
        self.org_id = org_id
        self.client = client or boto3.client('s3', region_name=region)

    @classmethod
    def from_config(cls, storage: StorageConfig, org_id: Optional[str] = None,
                    hash_algo: str = HASH_ALGO_SHA1) -> 'S3Uploader':
        """Build an uploader whose client uses explicit keys when the configuration has them."""
        client_kwargs = {'region_name': storage.region}
        if storage.access_key_id and storage.secret_access_key:
            client_kwargs['aws_access_key_id'] = storage.access_key_id
            client_kwargs['aws_secret_access_key'] = storage.secret_access_key
            if storage.session_token:
                client_kwargs['aws_session_token'] = storage.session_token
        return cls(storage.region, hash_algo=hash_algo, org_id=org_id,
                   client=boto3.client('s3', **client_kwargs))

    def object_key(self, file_path: str) -> str:
        file_name = os.path.basename(file_path)
        if self.org_id:
            return f"{self.org_id}/{file_name}"
        return file_name

    def object_url(self, bucket: str, key: str) -> str:
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, bucket: str, file_path: str) -> Tuple[str, str]:
        """
        Upload a local file.

        Args:
            bucket: Destination bucket
            file_path: Local file to upload

        Returns:
            Tuple of (object URL, hex digest of the file contents)

        Raises:
            UploadError: If the file cannot be read or the storage service fails
        """
        if not os.path.isfile(file_path):
            raise UploadError("file not found", file_path=file_path)

        key = self.object_key(file_path)
        try:
            file_hash = hash_file(file_path, self.hash_algo)
            logger.info(f"Uploading {file_path} to s3://{bucket}/{key}")
            with open(file_path, 'rb') as f:
                self.client.put_object(Bucket=bucket, Key=key, Body=f)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(str(e), file_path=file_path) from e
        except OSError as e:
            raise UploadError(str(e), file_path=file_path) from e

        url = self.object_url(bucket, key)
        logger.debug(f"Uploaded {file_path} ({self.hash_algo} {file_hash})")
        return url, file_hash
