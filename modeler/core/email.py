import boto3
from botocore.exceptions import ClientError
from modeler.config import settings
import logging

logger = logging.getLogger(__name__)


def send_email(target: str, title: str, content: str) -> None:
    """Send an HTML email through SES from the configured sender address"""
    client = boto3.client("ses", **settings.aws_client_kwargs())
    try:
        client.send_email(
            Source=settings.ses_sender_email,
            Destination={"ToAddresses": [target]},
            Message={
                "Subject": {"Data": title},
                "Body": {"Html": {"Data": content}},
            },
        )
    except ClientError as e:
        logger.error(f"Failed to send email to {target}: {str(e)}")
        raise
    logger.info("Email sent to %s", target)
