# evaltrack/services/reference_service.py
"""
Asignación de números de referencia (0001, 0002, ...).

El contador vive en la colección `counters` ({_id: <serie>, seq: n}) y se
incrementa con un único find_one_and_update($inc, upsert). Nunca leer-y-escribir:
dos altas concurrentes obtendrían el mismo número.

Limitaciones conocidas:
- renumber_after_deletion reescribe todas las solicitudes (O(N)).
- un alta que corre en paralelo con un renumerado puede quedar fuera del
  rango denso; no hay transacciones.
"""
import logging
import re
from evaltrack.core.config import settings
from evaltrack.core.errors import StorageError
from evaltrack.repositories import counters_repo, requests_repo
from evaltrack.utils.dates import utcnow

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"[0-9]+")


def format_reference(seq: int, width: int | None = None) -> str:
    return str(seq).zfill(width or settings.reference_width)


def parse_reference(value) -> int | None:
    # sólo dígitos ASCII: isdigit() acepta "²", que int() rechaza
    if isinstance(value, str) and _NUMERIC.fullmatch(value.strip()):
        return int(value.strip())
    return None


async def allocate(series: str | None = None) -> str:
    series = series or settings.reference_series
    doc = await counters_repo.increment(series)
    if not doc or "seq" not in doc:
        raise StorageError(f"Counter {series!r} could not be incremented")
    ref = format_reference(int(doc["seq"]))
    logger.info("allocate: %s -> %s", series, ref)
    return ref


async def initialize(series: str | None = None) -> int:
    """Alinea el contador con el mayor referenceNumber persistido (0 si no hay)."""
    series = series or settings.reference_series
    numbers = [n for n in (parse_reference(r) for r in await requests_repo.reference_numbers()) if n is not None]
    highest = max(numbers, default=0)
    await counters_repo.set_seq(series, highest)
    logger.info("initialize: contador %s = %d (%d solicitudes)", series, highest, len(numbers))
    return highest


async def renumber_after_deletion(deleted_id: str | None = None, series: str | None = None) -> int:
    """
    Reasigna 0001..N a las solicitudes restantes en orden de creación y deja
    el contador en N. Devuelve cuántos documentos cambiaron de número.
    """
    series = series or settings.reference_series
    survivors = await requests_repo.list_for_renumber()
    now = utcnow()
    changed = 0
    for position, doc in enumerate(survivors, start=1):
        ref = format_reference(position)
        if doc.get("referenceNumber") == ref:
            continue
        await requests_repo.update_by_id(doc["id"], {"$set": {"referenceNumber": ref, "lastUpdated": now}})
        changed += 1
    await counters_repo.set_seq(series, len(survivors))
    logger.info(
        "renumber_after_deletion(%s): %d restantes, %d renumeradas", deleted_id, len(survivors), changed
    )
    return changed


async def reset_all(series: str | None = None) -> int:
    """Borra todas las solicitudes y deja el contador en 0."""
    series = series or settings.reference_series
    deleted = await requests_repo.delete_all()
    await counters_repo.set_seq(series, 0)
    logger.info("reset_all: %d solicitudes eliminadas, contador %s = 0", deleted, series)
    return deleted


async def reset_counter(series: str | None = None) -> int:
    """
    Reinicia el contador a 0 SIN borrar solicitudes. Las próximas altas
    repetirán números ya existentes hasta superar el máximo actual.
    """
    series = series or settings.reference_series
    await counters_repo.set_seq(series, 0)
    logger.warning(
        "reset_counter: contador %s = 0 sin borrar solicitudes; las nuevas altas pueden duplicar referenceNumber",
        series,
    )
    return 0


async def current_seq(series: str | None = None) -> int:
    return await counters_repo.get_seq(series or settings.reference_series)
