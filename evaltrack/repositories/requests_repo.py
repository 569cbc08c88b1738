# evaltrack/repositories/requests_repo.py
from typing import Dict, Any, List, Optional
from pymongo import ReturnDocument
from evaltrack.core.db import get_db

NO_ID = {"_id": 0}


async def find_by_id(request_id: str) -> dict | None:
    return await get_db().requests.find_one({"id": request_id}, NO_ID)


async def exists(request_id: str) -> bool:
    return await get_db().requests.find_one({"id": request_id}, {"_id": 1}) is not None


async def insert(doc: dict):
    # copia: insert_one agrega _id al dict que recibe
    await get_db().requests.insert_one(dict(doc))


async def update_and_get(request_id: str, ops: Dict[str, Any]) -> dict | None:
    return await get_db().requests.find_one_and_update(
        {"id": request_id}, ops, projection=NO_ID, return_document=ReturnDocument.AFTER
    )


async def update_by_id(request_id: str, ops: Dict[str, Any]) -> int:
    res = await get_db().requests.update_one({"id": request_id}, ops)
    return res.matched_count


async def delete_by_id(request_id: str) -> dict | None:
    return await get_db().requests.find_one_and_delete({"id": request_id}, projection=NO_ID)


async def delete_all() -> int:
    res = await get_db().requests.delete_many({})
    return res.deleted_count


async def list_all(filt: Optional[Dict[str, Any]] = None) -> List[dict]:
    cur = get_db().requests.find(filt or {}, NO_ID).sort([("timestamp", 1), ("referenceNumber", 1)])
    return await cur.to_list(length=None)


async def list_for_renumber() -> List[dict]:
    """Sobrevivientes en orden de creación (timestamp asc)."""
    cur = get_db().requests.find(
        {}, {"_id": 0, "id": 1, "referenceNumber": 1, "timestamp": 1}
    ).sort([("timestamp", 1), ("referenceNumber", 1)])
    return await cur.to_list(length=None)


async def reference_numbers() -> List[str]:
    cur = get_db().requests.find({}, {"_id": 0, "referenceNumber": 1})
    return [d.get("referenceNumber") for d in await cur.to_list(length=None)]
