from dataclasses import dataclass, asdict
from datetime import datetime
import base64
import json

from ..common.clock import to_epoch_ms
from ..common.validators import ensure_identifier, ensure_timestamp


@dataclass(frozen=True)
class ReservationRecord:
    """Reserva tal y como la entrega el gestor de reservas (solo lectura aqui)."""
    booking_id: str
    location_id: str
    space_id: str
    user_id: str
    start_time: int  # milisegundos desde epoch
    end_time: int

    def __post_init__(self):
        # validar que ningun campo obligatorio sea vacio, None o de otro tipo
        for field in ("booking_id", "location_id", "space_id", "user_id"):
            ensure_identifier(getattr(self, field), field)
        for field in ("start_time", "end_time"):
            ensure_timestamp(getattr(self, field), field)

    @classmethod
    def from_datetimes(cls, booking_id: str, location_id: str, space_id: str, user_id: str,
                       start: datetime, end: datetime) -> "ReservationRecord":
        return cls(booking_id, location_id, space_id, user_id, to_epoch_ms(start), to_epoch_ms(end))

    # funciones para serializar y deserializar la reserva (almacen JSON)
    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "ReservationRecord":
        return ReservationRecord(**data)


@dataclass(frozen=True)
class TicketPayload:
    """Contenido firmado del ticket. Los campos son afirmaciones del portador
    hasta que el verificador los contrasta con la reserva autoritativa."""
    kind: str
    booking_id: str
    location_id: str
    space_id: str
    user_id: str
    valid_from: int
    valid_until: int
    issued_at: int
    signature: str  # HMAC-SHA256 en hexadecimal

    def signed_fields(self) -> tuple:
        # campos cubiertos por la firma, en orden canonico
        return (
            self.kind,
            self.booking_id,
            self.location_id,
            self.space_id,
            self.user_id,
            self.valid_from,
            self.valid_until,
            self.issued_at,
        )

    def to_wire(self) -> dict:
        return {
            "kind": self.kind,
            "bookingId": self.booking_id,
            "locationId": self.location_id,
            "spaceId": self.space_id,
            "userId": self.user_id,
            "validFrom": self.valid_from,
            "validUntil": self.valid_until,
            "issuedAt": self.issued_at,
            "signature": self.signature,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class ScannableTicket:
    payload: TicketPayload
    text: str   # contenido codificado en el QR
    png: bytes  # imagen del QR

    @property
    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")
