import boto3
from boto3.dynamodb.conditions import Attr
from modeler.config import settings
from typing import Any, Dict, List


class DynamoClient:
    _resource = None

    @classmethod
    def get_resource(cls):
        if cls._resource is None:
            cls._resource = boto3.resource(
                "dynamodb",
                endpoint_url=settings.dynamodb_endpoint_url,
                **settings.aws_client_kwargs()
            )
        return cls._resource

    @classmethod
    def reset_resource(cls):
        cls._resource = None


def get_dynamo():
    return DynamoClient.get_resource()


def scan_all(table, attribute: str, value: Any) -> List[Dict[str, Any]]:
    """Scan a table for items whose attribute equals value, following every page."""
    items: List[Dict[str, Any]] = []
    scan_kwargs = {"FilterExpression": Attr(attribute).eq(value)}
    while True:
        result = table.scan(**scan_kwargs)
        items.extend(result.get("Items", []))
        last_evaluated_key = result.get("LastEvaluatedKey")
        if not last_evaluated_key:
            return items
        scan_kwargs["ExclusiveStartKey"] = last_evaluated_key
