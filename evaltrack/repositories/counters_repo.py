# evaltrack/repositories/counters_repo.py
from pymongo import ReturnDocument
from evaltrack.core.db import get_db


async def increment(name: str) -> dict | None:
    """$inc + return en una sola operación (upsert crea el contador en 0 y lo deja en 1)."""
    return await get_db().counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )


async def set_seq(name: str, seq: int):
    await get_db().counters.update_one({"_id": name}, {"$set": {"seq": seq}}, upsert=True)


async def get_seq(name: str) -> int:
    doc = await get_db().counters.find_one({"_id": name})
    return int(doc["seq"]) if doc else 0
