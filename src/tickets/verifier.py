"""
VERIFICACION DE TICKETS DE APARCAMIENTO

Decide si un payload ya decodificado autoriza el acceso, contrastandolo con la
reserva autoritativa (obtenida aparte por booking_id) y recalculando la firma.
Funcion pura: no guarda estado entre escaneos y no lanza excepciones ante
entradas manipuladas, cada rechazo es un resultado con motivo.
"""
from dataclasses import dataclass
from enum import Enum

from .. import config
from ..logger import logger
from ..common.clock import now_ms
from ..common.constants import TICKET_KIND
from ..common.validators import is_timestamp
from ..crypto.mac import verify_hmac_hex
from .codec import canonicalize
from .models import ReservationRecord, TicketPayload


class VerificationFailure(Enum):
    MALFORMED = "malformed"  # solo en el flujo de escaneo (fallo de decode)
    INVALID_KIND = "invalid_kind"
    BOOKING_MISMATCH = "booking_mismatch"
    LOCATION_MISMATCH = "location_mismatch"
    USER_MISMATCH = "user_mismatch"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    SIGNATURE_INVALID = "signature_invalid"


# textos para el personal de acceso (no contienen material criptografico)
MESSAGES = {
    VerificationFailure.MALFORMED: "Código QR ilegible o no reconocido",
    VerificationFailure.INVALID_KIND: "Tipo de código QR no válido",
    VerificationFailure.BOOKING_MISMATCH: "El ticket no corresponde a esta reserva",
    VerificationFailure.LOCATION_MISMATCH: "El ticket es de otro aparcamiento o plaza",
    VerificationFailure.USER_MISMATCH: "El ticket pertenece a otro usuario",
    VerificationFailure.NOT_YET_VALID: "El ticket todavía no es válido",
    VerificationFailure.EXPIRED: "El ticket ha caducado",
    VerificationFailure.SIGNATURE_INVALID: "La firma del ticket no es válida",
}


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: VerificationFailure | None = None
    payload: TicketPayload | None = None
    message: str = ""

    def __bool__(self):
        return self.valid

    @classmethod
    def ok(cls, payload: TicketPayload) -> "VerificationResult":
        return cls(valid=True, payload=payload, message="Acceso autorizado")

    @classmethod
    def fail(cls, reason: VerificationFailure, message: str | None = None) -> "VerificationResult":
        return cls(valid=False, reason=reason, message=message or MESSAGES[reason])


# igualdad exacta de identificadores: 42 != "42"
def _same_identifier(claimed, authoritative) -> bool:
    return type(claimed) is str and type(authoritative) is str and claimed == authoritative


def _signature_matches(secret: bytes, payload: TicketPayload) -> bool:
    # campos con tipos inesperados no se pueden canonicalizar --> firma invalida
    if not is_timestamp(payload.issued_at) or type(payload.signature) is not str:
        return False
    message = canonicalize(*payload.signed_fields())
    return verify_hmac_hex(secret, message, payload.signature)


def _check(payload: TicketPayload, reservation: ReservationRecord, now: int, secret: bytes,
           leeway_ms: int) -> VerificationFailure | None:
    # 1. discriminador
    if type(payload.kind) is not str or payload.kind != TICKET_KIND:
        return VerificationFailure.INVALID_KIND
    # 2-4. campos frente a la reserva autoritativa (sin reserva no hay nada que contrastar)
    if not isinstance(reservation, ReservationRecord):
        return VerificationFailure.BOOKING_MISMATCH
    if not _same_identifier(payload.booking_id, reservation.booking_id):
        return VerificationFailure.BOOKING_MISMATCH
    if not (_same_identifier(payload.location_id, reservation.location_id)
            and _same_identifier(payload.space_id, reservation.space_id)):
        return VerificationFailure.LOCATION_MISMATCH
    if not _same_identifier(payload.user_id, reservation.user_id):
        return VerificationFailure.USER_MISMATCH
    # 5-6. ventana temporal [valid_from, valid_until], ambos extremos incluidos
    if not is_timestamp(payload.valid_from) or now < payload.valid_from - leeway_ms:
        return VerificationFailure.NOT_YET_VALID
    if not is_timestamp(payload.valid_until) or now > payload.valid_until + leeway_ms:
        return VerificationFailure.EXPIRED
    # 7. firma: sin ella ningun ticket es valido, aunque todo lo anterior coincida
    if not _signature_matches(secret, payload):
        return VerificationFailure.SIGNATURE_INVALID
    return None


# funcion que decide si el ticket autoriza el acceso en el instante `now`
def verify(payload: TicketPayload, reservation: ReservationRecord, now: int | None = None,
           secret: bytes | None = None, leeway_ms: int = 0) -> VerificationResult:
    key = secret if secret is not None else config.get_ticket_secret()
    if now is None:
        now = now_ms()

    booking_ref = getattr(reservation, "booking_id", None)
    failure = _check(payload, reservation, now, key, leeway_ms)
    if failure is not None:
        logger.warning(f"VERIFY: ticket rechazado para reserva {booking_ref}: {failure.value}")
        return VerificationResult.fail(failure)

    logger.info(f"VERIFY: ticket válido para reserva {booking_ref}")
    return VerificationResult.ok(payload)
