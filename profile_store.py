import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

from config import get_settings

logger = logging.getLogger(__name__)


_client: MongoClient | None = None
USER_FIELDS = ("name", "avatar")


def _get_client() -> MongoClient:
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def _get_database() -> Database:
    return _get_client()[get_settings().mongodb_db]


def _profiles():
    return _get_database()["profiles"]


def _users():
    return _get_database()["users"]


def _posts():
    return _get_database()["posts"]


def ensure_indexes() -> None:
    _profiles().create_index([("user", ASCENDING)], unique=True)
    _posts().create_index([("user", ASCENDING)])


def is_object_id(value: str) -> bool:
    return ObjectId.is_valid(value)


def _serialize(value: Any) -> Any:
    if isinstance(value, dict):
        doc = {}
        for key, item in value.items():
            doc["id" if key == "_id" else key] = _serialize(item)
        return doc
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _populate_users(profiles: list[dict]) -> list[dict]:
    user_ids = {profile["user"] for profile in profiles if profile.get("user") is not None}
    projection = {field: 1 for field in USER_FIELDS}
    users = {user["_id"]: user for user in _users().find({"_id": {"$in": list(user_ids)}}, projection)}
    for profile in profiles:
        profile["user"] = users.get(profile.get("user"))
    return profiles


def find_profile(user_id: str, populate: bool = True) -> dict | None:
    doc = _profiles().find_one({"user": ObjectId(user_id)})
    if not doc:
        return None
    if populate:
        _populate_users([doc])
    return doc


def list_profiles() -> list[dict]:
    docs = list(_profiles().find())
    return _populate_users(docs)


def upsert_profile(user_id: str, fields: dict) -> dict:
    payload = dict(fields)
    payload["user"] = ObjectId(user_id)

    doc = _profiles().find_one_and_update(
        {"user": payload["user"]},
        {
            "$set": payload,
            "$setOnInsert": {
                "experience": [],
                "education": [],
                "date": datetime.now(timezone.utc),
            },
        },
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    logger.info("Upserted profile user_id=%s profile_id=%s", user_id, doc["_id"])
    return _populate_users([doc])[0]


def save_profile(doc: dict) -> dict:
    _profiles().replace_one({"_id": doc["_id"]}, doc)
    logger.info("Saved profile profile_id=%s", doc["_id"])
    return _populate_users([dict(doc)])[0]


def delete_account(user_id: str) -> dict[str, int]:
    oid = ObjectId(user_id)
    outcome = {}

    result = _posts().delete_many({"user": oid})
    outcome["posts"] = result.deleted_count
    logger.info("Deleted posts user_id=%s count=%d", user_id, result.deleted_count)

    result = _profiles().delete_one({"user": oid})
    outcome["profile"] = result.deleted_count
    logger.info("Deleted profile user_id=%s count=%d", user_id, result.deleted_count)

    result = _users().delete_one({"_id": oid})
    outcome["user"] = result.deleted_count
    logger.info("Deleted user user_id=%s count=%d", user_id, result.deleted_count)

    return outcome


def to_json(doc: dict) -> dict:
    return _serialize(doc)
