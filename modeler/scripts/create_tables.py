"""
Create DynamoDB Tables Script
Creates every table the backend uses, keyed as declared on the models.
Existing tables are left untouched, so it is safe to re-run.

    python -m modeler.scripts.create_tables
"""

import sys
from botocore.exceptions import ClientError
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.entities.models import Entity
from modeler.modules.notes.models import Note
from modeler.modules.projects.models import Project
from modeler.modules.teams.models import Team, TeamInvite, TeamUser
from modeler.modules.users.models import User
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MODELS = [User, Team, TeamUser, TeamInvite, Project, Entity, Note]


def table_definition(model) -> dict:
    """CreateTable arguments: first key is the partition key, second (if any) the sort key"""
    key_types = ["HASH", "RANGE"]
    return {
        "TableName": model.TABLE_NAME,
        "KeySchema": [
            {"AttributeName": name, "KeyType": key_type}
            for name, key_type in zip(model.KEY_SCHEMA, key_types)
        ],
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": "S"}
            for name in model.KEY_SCHEMA
        ],
        "BillingMode": "PAY_PER_REQUEST",
    }


def create_tables(dynamo) -> int:
    """Create missing tables; returns how many were created"""
    existing = {table.name for table in dynamo.tables.all()}
    created_count = 0

    for model in MODELS:
        if model.TABLE_NAME in existing:
            logger.info(f"Table exists, skipping: {model.TABLE_NAME}")
            continue

        table = dynamo.create_table(**table_definition(model))
        table.wait_until_exists()
        created_count += 1
        logger.info(f"Created table: {model.TABLE_NAME}")

    return created_count


def main():
    try:
        created_count = create_tables(get_dynamo())
        logger.info(f"Done: {created_count} tables created, {len(MODELS) - created_count} already present")
    except ClientError as e:
        logger.error(f"Error creating tables: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
