# tests/conftest.py
import sys
import os

import pytest

# Añade el directorio raíz del proyecto (el padre de 'tests/') al sys.path
# Esto permite que los tests importen 'src' como un módulo.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from src import config
from src.tickets.models import ReservationRecord

SECRET = bytes.fromhex("6b" * 32)  # secreto de pruebas (256 bits)


# cada test usa un directorio de datos temporal y ningun secreto cacheado
@pytest.fixture(autouse=True)
def isolated_data(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_PATH", str(tmp_path / "data"))
    monkeypatch.setattr(config, "AUDIT_LOG_PATH", str(tmp_path / "data" / "audit.log"))
    monkeypatch.delenv(config.TICKET_SECRET_ENV, raising=False)
    config.clear_ticket_secret()
    yield tmp_path
    config.clear_ticket_secret()


@pytest.fixture
def secret():
    return SECRET


# reserva del escenario basico: B1 / L1 / S7 / U9 en [1000, 5000]
@pytest.fixture
def reservation():
    return ReservationRecord(
        booking_id="B1",
        location_id="L1",
        space_id="S7",
        user_id="U9",
        start_time=1000,
        end_time=5000,
    )
