# flujo completo de un escaneo: decodificar -> buscar la reserva -> verificar
from typing import Callable

from .. import config
from ..logger import logger
from ..audit.audit_log import record_event
from ..common.errors import DecodeError, ReservationNotFound
from .codec import decode
from .models import ReservationRecord
from .verifier import verify, VerificationFailure, VerificationResult


# cada escaneo es independiente: no se guarda estado entre llamadas
def scan_ticket(scanned, find_reservation: Callable[[str], ReservationRecord | None], now: int | None = None,
                secret: bytes | None = None, leeway_ms: int | None = None) -> VerificationResult:
    """Valida lo leido por un escaner. `find_reservation` es la busqueda del gestor
    de reservas; si no encuentra la reserva lanza ReservationNotFound o devuelve None. Los
    demas errores de la busqueda (red, timeouts) se propagan al llamador."""
    key = secret if secret is not None else config.get_ticket_secret()
    if leeway_ms is None:
        leeway_ms = config.CLOCK_SKEW_MS

    try:
        payload = decode(scanned)
    except DecodeError as e:
        logger.warning(f"SCAN: payload ilegible ({e.detail})")
        result = VerificationResult.fail(VerificationFailure.MALFORMED)
        record_event("scan", None, "failure", severity="medium", details=result.reason.value)
        return result

    try:
        reservation = find_reservation(payload.booking_id)
    except ReservationNotFound:
        reservation = None
    # una busqueda que devuelve None (u otra cosa) equivale a "no encontrada"
    if not isinstance(reservation, ReservationRecord):
        logger.warning(f"SCAN: reserva {payload.booking_id} no encontrada")
        result = VerificationResult.fail(VerificationFailure.BOOKING_MISMATCH, "Reserva no encontrada")
        record_event("scan", payload.booking_id, "failure", severity="medium", details="not_found")
        return result

    result = verify(payload, reservation, now=now, secret=key, leeway_ms=leeway_ms)
    if result.valid:
        record_event("scan", payload.booking_id, "success")
    else:
        # una firma invalida indica manipulacion --> severidad alta
        severity = "high" if result.reason is VerificationFailure.SIGNATURE_INVALID else "medium"
        record_event("scan", payload.booking_id, "failure", severity=severity, details=result.reason.value)
    return result
