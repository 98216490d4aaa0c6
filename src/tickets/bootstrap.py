"""
ARRANQUE DEL SERVICIO DE TICKETS

Los procesos que emiten o escanean tickets llaman a `startup()` antes de
atender peticiones: asi un secreto ausente o invalido detiene el arranque en
lugar de aparecer en el primer escaneo.

Para desplegar un emisor y sus escaneres hace falta un secreto compartido;
ejecutando este modulo se imprime uno nuevo listo para QR_SECRET_HEX:

    python -m src.tickets.bootstrap
"""
from .. import config
from ..logger import logger
from ..crypto.mac import generate_hmac_key


# funcion que prepara el proceso: carga y valida el secreto compartido
def startup() -> None:
    secret = config.init_ticket_secret()
    logger.info(f"STARTUP: secreto de tickets cargado desde {config.TICKET_SECRET_ENV} (key_bits={len(secret)*8})")


# funcion que genera un secreto nuevo en hexadecimal para QR_SECRET_HEX
def new_ticket_secret_hex(bits: int = 256) -> str:
    return generate_hmac_key(bits).hex()


if __name__ == "__main__":
    # solo se imprime por pantalla: guardarlo en el entorno es tarea del despliegue
    print(new_ticket_secret_hex())
