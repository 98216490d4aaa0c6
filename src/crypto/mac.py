# funciones para generacion de claves y computar/verificar HMAC-SHA256
from os import urandom
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from ..logger import logger
from ..config import HMAC_KEY_MIN_BITS
from ..common.constants import ALGO_HMAC_SHA256
from ..common.validators import ensure_min_bits

# funcion para generar una clave segura para HMAC de la longitud especificada
def generate_hmac_key(bits: int = 256) -> bytes:
    # valida que la longitud cumpla el minimo definido en la configuracion
    ensure_min_bits(bits, HMAC_KEY_MIN_BITS, "HMAC key")
    return urandom(bits // 8)

# funcion para calcular el valor HMAC-SHA256 para un mensaje dado y una clave
def compute_hmac(key: bytes, message: bytes) -> bytes:
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(message)
    tag = h.finalize()
    # solo se loguea algoritmo y tamano de clave, nunca la clave ni el tag
    logger.debug(f"HMAC compute: algorithm={ALGO_HMAC_SHA256}, key_bits={len(key)*8}")
    return tag

# funcion para verificar si el HMAC proporcionado es valido para el mensaje y la clave
def verify_hmac(key: bytes, message: bytes, tag: bytes) -> bool:
    # la comparacion la hace cryptography en tiempo constante
    if not isinstance(tag, (bytes, bytearray)):
        logger.debug(f"HMAC verify: tag con tipo inválido algorithm={ALGO_HMAC_SHA256}")
        return False
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(message)
    try:
        h.verify(bytes(tag))
        logger.debug(f"HMAC verify: valid algorithm={ALGO_HMAC_SHA256}")
        return True
    except InvalidSignature:
        logger.debug(f"HMAC verify: invalid algorithm={ALGO_HMAC_SHA256}")
        return False

# variantes en hexadecimal (formato en el que viaja la firma dentro del ticket)
def compute_hmac_hex(key: bytes, message: bytes) -> str:
    return compute_hmac(key, message).hex()

def verify_hmac_hex(key: bytes, message: bytes, tag_hex: str) -> bool:
    # un tag que no es hex valido es simplemente una firma invalida
    if type(tag_hex) is not str:
        return False
    try:
        tag = bytes.fromhex(tag_hex)
    except ValueError:
        return False
    # se exige la forma canonica (minusculas) para que no haya dos firmas validas
    if tag.hex() != tag_hex:
        return False
    return verify_hmac(key, message, tag)
