# taxonomia de errores de emision y lectura de tickets
# los resultados de verificacion NO son excepciones (ver tickets.verifier)


class TicketError(Exception):
    """Base de los errores del sistema de tickets. `reason` es un codigo estable."""

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


# payload ilegible: QR corrupto, codigo ajeno o lectura truncada
class DecodeError(TicketError, ValueError):
    def __init__(self, detail: str = ""):
        super().__init__("malformed", detail)


# el payload no cabe en el codigo QR con el nivel de correccion elegido
class EncodeError(TicketError, ValueError):
    def __init__(self, detail: str = ""):
        super().__init__("payload_too_large", detail)


# fallo de despliegue (secreto ausente o invalido): fatal en el arranque
class ConfigurationError(TicketError, RuntimeError):
    pass


# la reserva reclamada por el ticket no existe en el gestor de reservas
class ReservationNotFound(TicketError, KeyError):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__("not_found", f"reserva {booking_id!r} no encontrada")

    def __str__(self):
        return Exception.__str__(self)
