# registro de auditoria de emisiones y escaneos de tickets (JSON lines, solo anexar)
import json
import hashlib
from datetime import datetime, timezone
from pathlib import Path

from .. import config
from ..logger import logger


def _audit_path() -> Path:
    # se lee de config en cada llamada para que los tests puedan redirigirlo
    p = Path(config.AUDIT_LOG_PATH)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def hash_bytes(b: bytes) -> str:
    # calcula el SHA-256 de los bytes y devuelve el hex digest
    return hashlib.sha256(b).hexdigest()


# agrega una entrada al log de auditoria
# nunca debe recibir la firma ni el secreto: solo el hash del contenido firmado
# json.dumps escapa lo no ASCII: un identificador leido de un QR no rompe la escritura
def record_event(action: str, resource_id: str | None, status: str, severity: str = "low",
                 details: str = "", payload_hash: str | None = None) -> None:
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "resource": "parking_ticket",
        "resource_id": resource_id,
        "status": status,
        "severity": severity,
        "details": details,
        "payload_hash": payload_hash,
    }
    try:
        path = _audit_path()
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except (OSError, ValueError) as e:
        # no interrumpir la emision/verificacion por un fallo de auditoria
        logger.error(f"AUDIT: no se pudo escribir la entrada {action}: {e}")


# devuelve las entradas registradas (se ignoran las lineas corruptas)
def read_events() -> list[dict]:
    p = Path(config.AUDIT_LOG_PATH)
    if not p.exists():
        return []
    events = []
    for line in p.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        try:
            events.append(json.loads(line))
        except json.JSONDecodeError:
            logger.debug("AUDIT: línea corrupta ignorada")
    return events
