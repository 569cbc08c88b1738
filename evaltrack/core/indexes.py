# evaltrack/core/indexes.py
import logging
from evaltrack.models.common import DEFAULT_DETAILED_STATUS

logger = logging.getLogger(__name__)


async def ensure_core_indexes(db):
    # requests principales
    await db.requests.create_index([("id", 1)], unique=True)
    # no único: /reset-counter puede provocar duplicados y no debe romper las altas
    await db.requests.create_index([("referenceNumber", 1)])
    await db.requests.create_index([("timestamp", 1)])
    await db.requests.create_index([("assignedTo", 1)])
    await db.requests.create_index([("status", 1)])

    # directorio
    await db.team_members.create_index([("name", 1)], unique=True)
    await db.suppliers.create_index([("timestamp", 1)])

    # PI monitoring
    await db.pi_monitoring.create_index([("id", 1)], unique=True)
    await db.pi_monitoring.create_index([("status", 1)])
    await db.pi_monitoring.create_index([("supplierName", 1)])


async def migrate_requests_schema(db):
    """Rellena campos que no existían en documentos antiguos (idempotente)."""
    res = await db.requests.update_many(
        {"detailedStatus": {"$exists": False}}, {"$set": {"detailedStatus": DEFAULT_DETAILED_STATUS}}
    )
    await db.requests.update_many({"statusHistory": {"$exists": False}}, {"$set": {"statusHistory": []}})
    await db.requests.update_many({"status": {"$exists": False}}, {"$set": {"status": 0}})
    await db.requests.update_many({"remarks": {"$exists": False}}, {"$set": {"remarks": ""}})
    if res.modified_count:
        logger.info("migrate_requests_schema: %d solicitudes sin detailedStatus", res.modified_count)
