"""Table definitions for the plugin library database.

Column names keep the spelling used by earlier releases of the desktop app
(``subCategories``, ``sdkVersion``, ``isValid``) so existing ``plugins.db``
files open without a migration.
"""
from datetime import datetime
from sqlalchemy import MetaData, Table, Column, Text, Integer, Boolean, DateTime

metadata = MetaData()

plugins_table = Table(
    "plugins",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("vendor", Text),
    Column("version", Text),
    Column("category", Text),
    Column("subCategories", Text, nullable=False, default="[]"),
    Column("sdkVersion", Text),
    Column("path", Text),
    Column("cid", Text),
    Column("cardinality", Integer),
    Column("flags", Integer),
    Column("isValid", Boolean, nullable=False, default=True),
    Column("error", Text),
    Column("key", Text),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
)

settings_table = Table(
    "settings",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),
    Column("description", Text),
    Column("created_at", DateTime, nullable=False, default=datetime.utcnow),
    Column("updated_at", DateTime, nullable=False, default=datetime.utcnow),
)
