import asyncio
import json
import logging
from typing import BinaryIO

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from app.core.config import settings
from app.core.exceptions import BackendError

logger = logging.getLogger(__name__)


class S3Client:
    def __init__(self, bucket_name: str | None = None) -> None:
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.session = boto3.session.Session()
        self.client = self.session.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_ACCESS_KEY or None,
            aws_secret_access_key=settings.S3_SECRET_KEY or None,
            region_name="us-east-1",
            config=Config(signature_version="s3v4"),
        )

    def public_url(self, object_name: str) -> str:
        return f"{settings.S3_PUBLIC_ENDPOINT}/{self.bucket_name}/{object_name}"

    async def upload_file(
        self, file_obj: BinaryIO, object_name: str, content_type: str
    ) -> str:
        try:
            await asyncio.to_thread(
                self.client.upload_fileobj,
                Fileobj=file_obj,
                Bucket=self.bucket_name,
                Key=object_name,
                ExtraArgs={"ContentType": content_type},
            )
        except ClientError as ex:
            logger.error(f"S3 file upload failed: {ex}")
            raise BackendError(f"Image upload failed: {ex}") from ex

        return self.public_url(object_name)

    async def delete_file(self, object_name: str) -> None:
        try:
            await asyncio.to_thread(
                self.client.delete_object,
                Bucket=self.bucket_name,
                Key=object_name,
            )
        except ClientError as ex:
            logger.error(f"S3 file delete failed: {ex}")
            raise BackendError(f"Image delete failed: {ex}") from ex

    async def ensure_bucket_exists(self) -> None:
        try:
            await asyncio.to_thread(self.client.head_bucket, Bucket=self.bucket_name)
        except ClientError:
            logger.info(f"Bucket {self.bucket_name} not found. Creating...")
            await asyncio.to_thread(self.client.create_bucket, Bucket=self.bucket_name)

            # avatars and recipe photos are served straight from the bucket
            policy = {
                "Version": "2012-10-17",
                "Statement": [
                    {
                        "Sid": "PublicRead",
                        "Effect": "Allow",
                        "Principal": "*",
                        "Action": ["s3:GetObject"],
                        "Resource": [f"arn:aws:s3:::{self.bucket_name}/*"],
                    }
                ],
            }

            await asyncio.to_thread(
                self.client.put_bucket_policy,
                Bucket=self.bucket_name,
                Policy=json.dumps(policy),
            )


s3_client = S3Client()
