"""
Database module - PostgreSQL and MongoDB connection checks.

Usage:
    from service_components.database import MongoDB, MongoComponents, PostgresComponents

    db = MongoDB()
    await db.connect(uri, database_name, models)
    mongo = MongoComponents(db.client)

    postgres = PostgresComponents.from_url(dsn)
"""

from service_components.database.mongodb import (
    MongoComponents,
    MongoConnectionState,
    MongoDB,
)
from service_components.database.postgres import PostgresComponents

__all__ = [
    "MongoDB",
    "MongoComponents",
    "MongoConnectionState",
    "PostgresComponents",
]
