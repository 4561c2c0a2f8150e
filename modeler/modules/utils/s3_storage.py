import boto3
from botocore.exceptions import ClientError
from modeler.config import settings
import logging

logger = logging.getLogger(__name__)


class S3Storage:
    def __init__(self):
        if not settings.s3_bucket_name:
            raise ValueError("S3 bucket name must be configured")

        self.s3_client = boto3.client('s3', **settings.aws_client_kwargs())
        self.bucket_name = settings.s3_bucket_name

    def public_url(self, key: str) -> str:
        return f"{settings.s3_public_url.rstrip('/')}/{key}"

    def upload_file(self, file_content: bytes, key: str, content_type: str = "application/octet-stream") -> str:
        """Upload a publicly readable object and return its public URL"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type,
                ACL="public-read"
            )
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise
        return self.public_url(key)
