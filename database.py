"""
Database helpers

One MongoClient per process, opened on startup and closed on shutdown.
Route handlers never touch the module globals directly: they receive the
Database handle through the get_db dependency, so tests can swap in an
in-memory database.
"""

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

logger = logging.getLogger(__name__)

# Collections keyed by their business id
COLLECTIONS = ("games", "customers")

client: Optional[MongoClient] = None
db: Optional[Database] = None
# unique `id` indexes confirmed on the current database
indexes_ready = False


def init_db(database_url: str, database_name: str, timeout_ms: int = 5000) -> Database:
    global client, db, indexes_ready
    indexes_ready = False
    client = MongoClient(database_url, serverSelectionTimeoutMS=timeout_ms)
    db = client[database_name]
    logger.info("MongoDB client ready for %s", database_name)
    return db


def close_db():
    global client, db, indexes_ready
    if client is not None:
        client.close()
        logger.info("MongoDB client closed")
    client = None
    db = None
    indexes_ready = False


def get_db() -> Database:
    """FastAPI dependency for the shared database handle."""
    if db is None:
        raise RuntimeError("Database not initialized")
    return db


def ensure_indexes(database: Database):
    for name in COLLECTIONS:
        database[name].create_index([("id", ASCENDING)], unique=True)


def ensure_indexes_once(database: Database):
    """Create the unique indexes unless an earlier call already succeeded.

    Writes call this first, so a store that was down at startup still gets
    its indexes before the first document lands.
    """
    global indexes_ready
    if not indexes_ready:
        ensure_indexes(database)
        indexes_ready = True


# -----------------------------------------------------------------------------
# Document helpers
# -----------------------------------------------------------------------------

def parse_business_id(raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f'Cast to Number failed for value "{raw}" at path "id"')


def to_document(data: Union[BaseModel, dict]) -> dict:
    """Turn a model (only the fields actually sent) into a BSON-ready dict.

    BSON has no plain date type: dates are stored as midnight datetimes.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    doc = {}
    for key, value in data.items():
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        doc[key] = value
    return doc


def serialize_document(doc: dict, date_fields: Iterable[str] = ()) -> dict:
    if not doc:
        return doc
    doc = dict(doc)
    if isinstance(doc.get("_id"), ObjectId):
        doc["_id"] = str(doc["_id"])
    for key in date_fields:
        if isinstance(doc.get(key), datetime):
            doc[key] = doc[key].date()
    return doc


def create_document(database: Database, collection_name: str, data: Union[BaseModel, dict]) -> dict:
    """Insert one document and return it with its store-assigned _id."""
    doc = to_document(data)
    ensure_indexes_once(database)
    result = database[collection_name].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def get_documents(database: Database, collection_name: str, filter_dict: Optional[dict] = None) -> list:
    return list(database[collection_name].find(filter_dict or {}))


def update_document(database: Database, collection_name: str, business_id: int, data: Union[BaseModel, dict]) -> Optional[dict]:
    """Apply the given fields with $set and return the document after the update."""
    changes = to_document(data)
    collection = database[collection_name]
    if not changes:
        # $set refuses an empty document
        return collection.find_one({"id": business_id})
    ensure_indexes_once(database)
    return collection.find_one_and_update(
        {"id": business_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
