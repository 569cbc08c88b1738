# evaltrack/services/stats_service.py
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from evaltrack.models.common import ONGOING, COMPLETED, CANCELED
from evaltrack.repositories import requests_repo
from evaltrack.utils.dates import as_utc, parse_date


def month_range(month: int, year: int):
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc) if month == 12 else datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def completion_rate(open_: int, closed: int, canceled: int) -> int:
    total = open_ + closed + canceled
    return round(closed / total * 100) if total > 0 else 0


def efficiency_rate(tasks: List[dict]) -> str:
    """% de tareas completadas a tiempo (completedAt <= dateNeeded), con 2 decimales."""
    if not tasks:
        return "0.00"
    timely = 0
    for t in tasks:
        needed = parse_date(t.get("dateNeeded"))
        done = parse_date(t.get("completedAt"))
        if needed and done and done <= needed:
            timely += 1
    return f"{timely / len(tasks) * 100:.2f}"


def _empty_row(name: str) -> Dict[str, Any]:
    return {"name": name, "openTasks": 0, "closedTasks": 0, "canceledTasks": 0,
            "tasks": [], "completionRate": 0, "efficiencyRate": "0.00"}


async def team_member_stats(evaluator_id: Optional[str] = None,
                            month: Optional[int] = None,
                            year: Optional[int] = None) -> List[Dict[str, Any]]:
    filt: Dict[str, Any] = {"assignedTo": evaluator_id} if evaluator_id else {"assignedTo": {"$nin": [None, ""]}}
    requests = await requests_repo.list_all(filt)
    if month and year:
        start, end = month_range(month, year)
        requests = [r for r in requests if r.get("timestamp") and start <= as_utc(r["timestamp"]) < end]

    stats: Dict[str, Dict[str, Any]] = {}
    for r in requests:
        row = stats.setdefault(r["assignedTo"], _empty_row(r["assignedTo"]))
        st = r.get("status")
        if st == ONGOING:
            row["openTasks"] += 1
        elif st == COMPLETED:
            row["closedTasks"] += 1
        elif st == CANCELED:
            row["canceledTasks"] += 1
        row["tasks"].append(r)

    for row in stats.values():
        row["completionRate"] = completion_rate(row["openTasks"], row["closedTasks"], row["canceledTasks"])
        row["efficiencyRate"] = efficiency_rate(row["tasks"])

    if evaluator_id:
        return [stats.get(evaluator_id) or _empty_row(evaluator_id)]
    return list(stats.values())
