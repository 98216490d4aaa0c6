# almacen JSON de reservas: implementa la busqueda por booking_id que usan los escaneres
import json
from pathlib import Path
from typing import Dict, Any, List

from .. import config
from ..logger import logger
from ..common.errors import ReservationNotFound
from ..common.validators import ensure_time_window
from ..tickets.models import ReservationRecord


def _db_path() -> Path:
    return Path(config.DATA_PATH) / "reservations.db"

def _load_db() -> Dict[str, Any]:
    db_path = _db_path()
    if not db_path.exists():
        return {}
    try:
        return json.loads(db_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        # si esta corrupto --> se trata como vacio
        logger.warning(f"reservations: DB corrupta ({e}). Se ignora su contenido.")
        return {}

def _save_db(db: Dict[str, Any]) -> None:
    db_path = _db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.write_text(json.dumps(db, indent=2, ensure_ascii=False), encoding="utf-8")


# guarda (o sobreescribe) una reserva
def add_reservation(record: ReservationRecord) -> None:
    # la coherencia de la ventana es responsabilidad del gestor de reservas
    ensure_time_window(record.start_time, record.end_time)
    db = _load_db()
    db[record.booking_id] = record.to_dict()
    _save_db(db)
    logger.info(f"reservations: reserva {record.booking_id} guardada")

# busca la reserva autoritativa por booking_id
def find_reservation(booking_id: str) -> ReservationRecord:
    entry = _load_db().get(booking_id) if type(booking_id) is str else None
    if not isinstance(entry, dict):
        raise ReservationNotFound(booking_id)
    try:
        return ReservationRecord.from_dict(entry)
    except (TypeError, ValueError) as e:
        # entrada inconsistente en el almacen: se trata como inexistente
        logger.warning(f"reservations: entrada {booking_id} inválida: {e}")
        raise ReservationNotFound(booking_id)

# lista los booking_id de un usuario
def list_user_reservations(user_id: str) -> List[str]:
    db = _load_db()
    return [bid for bid, entry in db.items() if isinstance(entry, dict) and entry.get("user_id") == user_id]

def remove_reservation(booking_id: str) -> None:
    db = _load_db()
    if booking_id not in db:
        raise ReservationNotFound(booking_id)
    del db[booking_id]
    _save_db(db)
