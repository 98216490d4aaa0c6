# test para reservations/store.py
import pytest

from src.common.errors import ReservationNotFound
from src.reservations import store
from src.tickets.models import ReservationRecord


# añadir y buscar reserva (roundtrip)
def test_add_and_find_roundtrip(reservation):
    store.add_reservation(reservation)
    got = store.find_reservation("B1")
    assert got == reservation
    assert isinstance(got, ReservationRecord)


def test_find_missing_raises_not_found():
    with pytest.raises(ReservationNotFound) as excinfo:
        store.find_reservation("nope")
    assert excinfo.value.reason == "not_found"
    # tambien es un KeyError para el codigo que ya lo captura asi
    assert isinstance(excinfo.value, KeyError)


# la busqueda no hace coercion de tipos
def test_find_non_string_id_not_found(reservation):
    store.add_reservation(reservation)
    with pytest.raises(ReservationNotFound):
        store.find_reservation(None)


# ventana incoherente --> no se guarda
def test_add_rejects_inverted_window():
    with pytest.raises(ValueError):
        store.add_reservation(ReservationRecord("B9", "L1", "S1", "U1", 5000, 1000))
    with pytest.raises(ReservationNotFound):
        store.find_reservation("B9")


# el modelo rechaza campos vacios o con tipos inexactos
@pytest.mark.parametrize("kwargs", [
    dict(booking_id="", location_id="L", space_id="S", user_id="U", start_time=1, end_time=2),
    dict(booking_id=1, location_id="L", space_id="S", user_id="U", start_time=1, end_time=2),
    dict(booking_id="B", location_id="L", space_id="S", user_id=None, start_time=1, end_time=2),
    dict(booking_id="B", location_id="L", space_id="S", user_id="U", start_time="1", end_time=2),
    dict(booking_id="B", location_id="L", space_id="S", user_id="U", start_time=1, end_time=2.5),
])
def test_reservation_record_validation(kwargs):
    with pytest.raises(ValueError):
        ReservationRecord(**kwargs)


def test_from_datetimes_uses_epoch_ms():
    from datetime import datetime, timezone
    r = ReservationRecord.from_datetimes(
        "B1", "L1", "S7", "U9",
        datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc),
        datetime(1970, 1, 1, 0, 0, 5),  # naive --> UTC
    )
    assert (r.start_time, r.end_time) == (1000, 5000)


# listado y borrado
def test_list_and_remove(reservation):
    store.add_reservation(reservation)
    store.add_reservation(ReservationRecord("B2", "L1", "S8", "U9", 1, 2))
    store.add_reservation(ReservationRecord("B3", "L1", "S9", "U1", 1, 2))
    assert sorted(store.list_user_reservations("U9")) == ["B1", "B2"]
    store.remove_reservation("B2")
    assert store.list_user_reservations("U9") == ["B1"]
    with pytest.raises(ReservationNotFound):
        store.remove_reservation("B2")


# base de datos corrupta --> se trata como vacia
def test_corrupt_db_reads_as_empty(reservation):
    store.add_reservation(reservation)
    store._db_path().write_text("{ not: valid json", encoding="utf-8")
    assert store.list_user_reservations("U9") == []
    with pytest.raises(ReservationNotFound):
        store.find_reservation("B1")


# entrada inconsistente en el almacen --> no encontrada
def test_invalid_entry_is_not_found(reservation):
    store.add_reservation(reservation)
    db = store._load_db()
    db["B1"]["user_id"] = 7
    store._save_db(db)
    with pytest.raises(ReservationNotFound):
        store.find_reservation("B1")
