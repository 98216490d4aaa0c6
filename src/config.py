# configuracion global para la aplicacion
import os
import binascii

from .common.errors import ConfigurationError

# rutas y parametros del archivo de log
LOG_FILE = os.getenv("LOG_FILE", "parking_tickets.log")

# parametros de seguridad
HMAC_KEY_MIN_BITS = 128 # HMAC-SHA256

# rutas para almacenar datos (reservas y auditoria)
DATA_PATH = os.getenv("DATA_PATH", "data")
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", os.path.join(DATA_PATH, "audit.log"))

# secreto compartido entre emisor y escaneres (hex), sin valor por defecto
TICKET_SECRET_ENV = "QR_SECRET_HEX"

# parametros del codigo QR
QR_ERROR_CORRECTION = os.getenv("QR_ERROR_CORRECTION", "M")
QR_BOX_SIZE = int(os.getenv("QR_BOX_SIZE", "8"))
QR_BORDER = int(os.getenv("QR_BORDER", "1"))

# tolerancia de desfase de reloj de los escaneres (milisegundos)
CLOCK_SKEW_MS = int(os.getenv("CLOCK_SKEW_MS", "0"))


def load_ticket_secret() -> bytes:
    # lee el secreto del entorno: si falta o no es valido --> error fatal de configuracion
    raw = os.environ.get(TICKET_SECRET_ENV, "").strip()
    if not raw:
        raise ConfigurationError("missing_secret", f"{TICKET_SECRET_ENV} no está configurado.")
    try:
        secret = binascii.unhexlify(raw)
    except (binascii.Error, ValueError):
        raise ConfigurationError("invalid_secret", f"{TICKET_SECRET_ENV} no es hexadecimal válido.")
    if len(secret) * 8 < HMAC_KEY_MIN_BITS:
        raise ConfigurationError(
            "invalid_secret", f"{TICKET_SECRET_ENV}: longitud mínima {HMAC_KEY_MIN_BITS} bits."
        )
    return secret


# secreto cargado una sola vez en el arranque del proceso
_TICKET_SECRET: bytes | None = None

def init_ticket_secret() -> bytes:
    """Carga el secreto al arrancar el proceso. Falla de inmediato si no existe."""
    global _TICKET_SECRET
    _TICKET_SECRET = load_ticket_secret()
    return _TICKET_SECRET

def get_ticket_secret() -> bytes:
    if _TICKET_SECRET is None:
        return init_ticket_secret()
    return _TICKET_SECRET

def set_ticket_secret(secret: bytes) -> None:
    global _TICKET_SECRET
    if not isinstance(secret, (bytes, bytearray)) or len(secret) * 8 < HMAC_KEY_MIN_BITS:
        raise ConfigurationError("invalid_secret", f"El secreto debe tener al menos {HMAC_KEY_MIN_BITS} bits.")
    _TICKET_SECRET = bytes(secret)

def clear_ticket_secret() -> None:
    global _TICKET_SECRET
    _TICKET_SECRET = None
