# generacion de la imagen QR del ticket (qrcode + Pillow)
from io import BytesIO

import qrcode
from qrcode.exceptions import DataOverflowError

from ..config import QR_ERROR_CORRECTION, QR_BOX_SIZE, QR_BORDER
from ..common.errors import ConfigurationError, EncodeError
from ..logger import logger

# niveles de correccion de errores de qrcode (L ~7%, M ~15%, Q ~25%, H ~30%)
_ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def _error_correction(level: str | None) -> int:
    level = (level or QR_ERROR_CORRECTION).upper()
    if level not in _ERROR_CORRECTION_LEVELS:
        raise ConfigurationError("invalid_option", f"Nivel de corrección QR desconocido: {level}")
    return _ERROR_CORRECTION_LEVELS[level]


# funcion que genera el PNG del QR para el texto dado
def render_qr_png(text: str, error_correction: str | None = None) -> bytes:
    qr = qrcode.QRCode(
        version=None,  # la version (tamano) se elige segun el contenido
        error_correction=_error_correction(error_correction),
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(text)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        # el contenido supera la capacidad maxima del QR (version 40) --> no seria escaneable
        logger.warning(f"QR: payload de {len(text)} caracteres no cabe en el código: {e}")
        raise EncodeError(f"el payload ({len(text)} caracteres) supera la capacidad del QR")

    img = qr.make_image(fill_color="black", back_color="white")
    buf = BytesIO()
    img.save(buf, format="PNG")
    logger.debug(f"QR: generado version={qr.version}, bytes={buf.tell()}")
    return buf.getvalue()


