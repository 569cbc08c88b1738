# evaltrack/repositories/pi_repo.py
from typing import Dict, Any, List
from pymongo import ReturnDocument
from evaltrack.core.db import get_db

NO_ID = {"_id": 0}


async def insert(doc: dict):
    await get_db().pi_monitoring.insert_one(dict(doc))


async def find_by_id(record_id: str) -> dict | None:
    return await get_db().pi_monitoring.find_one({"id": record_id}, NO_ID)


async def list_filtered(filt: Dict[str, Any]) -> List[dict]:
    cur = get_db().pi_monitoring.find(filt, NO_ID).sort("createdAt", -1)
    return await cur.to_list(length=None)


async def update_and_get(record_id: str, fields: Dict[str, Any]) -> dict | None:
    return await get_db().pi_monitoring.find_one_and_update(
        {"id": record_id}, {"$set": fields}, projection=NO_ID, return_document=ReturnDocument.AFTER
    )


async def delete_by_id(record_id: str) -> int:
    res = await get_db().pi_monitoring.delete_one({"id": record_id})
    return res.deleted_count
