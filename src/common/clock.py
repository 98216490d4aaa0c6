# utilidades de tiempo: todos los instantes son milisegundos desde epoch (UTC)
import time
from datetime import datetime, timezone


def now_ms() -> int:
    return time.time_ns() // 1_000_000

# convierte un datetime a milisegundos (los naive se interpretan como UTC)
def to_epoch_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)

