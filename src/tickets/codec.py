"""
EMISION Y (DE)CODIFICACION DE TICKETS DE APARCAMIENTO

Un ticket es un payload JSON firmado con HMAC-SHA256 (secreto compartido entre
emisor y escaneres) que se entrega como codigo QR. Este modulo no decide si un
ticket es valido: `decode` solo comprueba la estructura, la autenticidad la
decide `tickets.verifier`.
"""
import json

from .. import config
from ..logger import logger
from ..audit.audit_log import record_event, hash_bytes
from ..common.clock import now_ms
from ..common.constants import TICKET_KIND, WIRE_FIELDS, ALGO_HMAC_SHA256
from ..common.errors import DecodeError
from ..common.validators import is_identifier, is_timestamp
from ..crypto.mac import compute_hmac_hex
from .models import ReservationRecord, TicketPayload, ScannableTicket
from .qr import render_qr_png

_IDENTIFIER_FIELDS = ("kind", "bookingId", "locationId", "spaceId", "userId")
_TIMESTAMP_FIELDS = ("validFrom", "validUntil", "issuedAt")


# serializacion canonica de los campos firmados
# un array JSON escapa cada cadena, asi "A,B" nunca se confunde con "A" + "B"
# surrogatepass: un payload construido a mano nunca hace fallar la codificacion
def canonicalize(*fields) -> bytes:
    return json.dumps(list(fields), separators=(",", ":"), ensure_ascii=False).encode("utf-8", "surrogatepass")


def compute_signature(secret: bytes, *fields) -> str:
    return compute_hmac_hex(secret, canonicalize(*fields))


# funcion que emite el ticket firmado y su QR para una reserva
def issue(reservation: ReservationRecord, secret: bytes | None = None, now: int | None = None) -> ScannableTicket:
    # sin secreto no se emite nada (ConfigurationError)
    key = secret if secret is not None else config.get_ticket_secret()
    issued_at = now if now is not None else now_ms()

    fields = (
        TICKET_KIND,
        reservation.booking_id,
        reservation.location_id,
        reservation.space_id,
        reservation.user_id,
        reservation.start_time,
        reservation.end_time,
        issued_at,
    )
    message = canonicalize(*fields)
    payload = TicketPayload(*fields, signature=compute_hmac_hex(key, message))

    text = encode_payload(payload)
    png = render_qr_png(text)

    logger.info(
        f"TICKETS: emitido ticket para reserva {reservation.booking_id} "
        f"(kind={TICKET_KIND}, algorithm={ALGO_HMAC_SHA256}, issued_at={issued_at})"
    )
    record_event("issue", reservation.booking_id, "success", payload_hash=hash_bytes(message))
    return ScannableTicket(payload=payload, text=text, png=png)


def encode_payload(payload: TicketPayload) -> str:
    return payload.to_json()


# funcion que reconstruye el payload desde lo leido por el escaner
def decode(scanned) -> TicketPayload:
    """Acepta un ScannableTicket, un TicketPayload, el texto del QR (str o
    bytes UTF-8) o un dict ya parseado. Lanza DecodeError si la estructura no
    es exactamente la esperada; no se rellena ningun campo por defecto."""
    if isinstance(scanned, ScannableTicket):
        scanned = scanned.text
    elif isinstance(scanned, TicketPayload):
        # se vuelve a validar: un payload construido a mano puede tener tipos incorrectos
        scanned = scanned.to_wire()
    if isinstance(scanned, (bytes, bytearray)):
        try:
            scanned = bytes(scanned).decode("utf-8")
        except UnicodeDecodeError:
            raise DecodeError("el contenido no es UTF-8")
    if isinstance(scanned, str):
        try:
            data = json.loads(scanned)
        except (ValueError, RecursionError):
            raise DecodeError("el contenido no es JSON")
    elif isinstance(scanned, dict):
        data = scanned
    else:
        raise DecodeError(f"tipo de entrada no soportado: {type(scanned).__name__}")

    if not isinstance(data, dict):
        raise DecodeError("el payload debe ser un objeto JSON")

    missing = [k for k in WIRE_FIELDS if k not in data]
    if missing:
        raise DecodeError(f"faltan campos obligatorios: {', '.join(missing)}")
    unknown = sorted(str(k) for k in data if k not in WIRE_FIELDS)
    if unknown:
        raise DecodeError(f"campos desconocidos: {', '.join(unknown)}")

    # tipos exactos: nada de coercion entre numeros y cadenas
    for k in _IDENTIFIER_FIELDS:
        if not is_identifier(data[k]):
            raise DecodeError(f"'{k}' debe ser un texto no vacío")
    for k in _TIMESTAMP_FIELDS:
        if not is_timestamp(data[k]):
            raise DecodeError(f"'{k}' debe ser un entero")
    if type(data["signature"]) is not str or not data["signature"]:
        raise DecodeError("'signature' debe ser un texto no vacío")

    return TicketPayload(
        kind=data["kind"],
        booking_id=data["bookingId"],
        location_id=data["locationId"],
        space_id=data["spaceId"],
        user_id=data["userId"],
        valid_from=data["validFrom"],
        valid_until=data["validUntil"],
        issued_at=data["issuedAt"],
        signature=data["signature"],
    )
