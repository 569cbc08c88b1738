# evaltrack/repositories/directory_repo.py
from typing import List
from pymongo import ReturnDocument
from evaltrack.core.db import get_db

NO_ID = {"_id": 0}


# ---- team members ----
async def list_team_members() -> List[dict]:
    return await get_db().team_members.find({}, NO_ID).sort("name", 1).to_list(length=None)


async def find_team_member(name: str) -> dict | None:
    return await get_db().team_members.find_one({"name": name}, NO_ID)


async def upsert_profile_image(name: str, path: str) -> dict:
    return await get_db().team_members.find_one_and_update(
        {"name": name},
        {"$set": {"profileImage": path},
         "$setOnInsert": {"openTasks": 0, "closedTasks": 0, "completionRate": 0}},
        upsert=True,
        projection=NO_ID,
        return_document=ReturnDocument.AFTER,
    )


# ---- suppliers ----
async def list_suppliers() -> List[dict]:
    return await get_db().suppliers.find({}, NO_ID).sort("timestamp", 1).to_list(length=None)


async def insert_supplier(doc: dict):
    await get_db().suppliers.insert_one(dict(doc))
