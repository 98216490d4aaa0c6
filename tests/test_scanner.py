# test para tickets/scanner.py (flujo completo de escaneo)
import json

import pytest

from src import config
from src.audit.audit_log import read_events
from src.common.errors import ReservationNotFound
from src.reservations import store
from src.tickets import issue, scan_ticket, VerificationFailure


# helper: busqueda en memoria que imita al gestor de reservas
def _lookup(*records):
    by_id = {r.booking_id: r for r in records}

    def find(booking_id):
        if booking_id not in by_id:
            raise ReservationNotFound(booking_id)
        return by_id[booking_id]
    return find


def test_scan_happy_path(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    result = scan_ticket(ticket.text, _lookup(reservation), now=2500, secret=secret)
    assert result.valid
    assert result.payload == ticket.payload


# lectura corrupta del QR --> MALFORMED, sin consultar reservas
def test_scan_malformed_does_not_lookup(secret):
    def find(booking_id):
        raise AssertionError("no se debe consultar")
    result = scan_ticket('{"kind": "parking_booking.v1"', find, now=2500, secret=secret)
    assert result.reason is VerificationFailure.MALFORMED


# reserva inexistente --> rechazo de tipo BOOKING_MISMATCH, no excepcion
def test_scan_unknown_booking(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    result = scan_ticket(ticket.text, _lookup(), now=2500, secret=secret)
    assert result.reason is VerificationFailure.BOOKING_MISMATCH
    assert result.message == "Reserva no encontrada"


# una busqueda que devuelve None en lugar de lanzar ReservationNotFound
def test_scan_lookup_returning_none(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    result = scan_ticket(ticket.text, lambda booking_id: None, now=2500, secret=secret)
    assert result.reason is VerificationFailure.BOOKING_MISMATCH
    assert result.message == "Reserva no encontrada"
    assert read_events()[-1]["details"] == "not_found"


# un surrogate suelto escapado en el JSON no rompe el escaneo (ni su auditoria)
def test_scan_lone_surrogate_booking_id(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    data = json.loads(ticket.text)
    data["bookingId"] = "\ud800"
    text = json.dumps(data)
    assert "\\ud800" in text
    result = scan_ticket(text, store.find_reservation, now=2500, secret=secret)
    assert not result.valid
    assert result.reason is VerificationFailure.MALFORMED
    assert read_events()[-1]["status"] == "failure"


# otros errores de la busqueda (red, timeouts) son del llamador
def test_scan_propagates_infrastructure_errors(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)

    def find(booking_id):
        raise TimeoutError("gestor de reservas no responde")
    with pytest.raises(TimeoutError):
        scan_ticket(ticket.text, find, now=2500, secret=secret)


# ticket manipulado en transito
def test_scan_tampered_text(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    data = json.loads(ticket.text)
    data["validUntil"] = 9_999_999
    result = scan_ticket(json.dumps(data), _lookup(reservation), now=6000, secret=secret)
    assert result.reason is VerificationFailure.SIGNATURE_INVALID


# los escaneos son independientes: el mismo ticket se puede verificar varias veces
def test_scans_are_stateless(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    find = _lookup(reservation)
    assert scan_ticket(ticket, find, now=2000, secret=secret).valid
    assert scan_ticket(ticket, find, now=3000, secret=secret).valid
    assert scan_ticket(ticket, find, now=7000, secret=secret).reason is VerificationFailure.EXPIRED


# tolerancia de reloj tomada de la configuracion
def test_scan_uses_configured_clock_skew(monkeypatch, reservation, secret):
    monkeypatch.setattr(config, "CLOCK_SKEW_MS", 50)
    ticket = issue(reservation, secret=secret, now=500)
    assert scan_ticket(ticket.text, _lookup(reservation), now=5050, secret=secret).valid


# integracion con el almacen JSON de reservas
def test_scan_with_reservation_store(reservation, secret):
    store.add_reservation(reservation)
    ticket = issue(reservation, secret=secret, now=500)
    assert scan_ticket(ticket.text, store.find_reservation, now=2500, secret=secret).valid


# cada escaneo queda en la auditoria, sin la firma
def test_scan_is_audited_without_signature(reservation, secret):
    ticket = issue(reservation, secret=secret, now=500)
    find = _lookup(reservation)
    scan_ticket(ticket.text, find, now=2500, secret=secret)
    scan_ticket(ticket.text, find, now=9000, secret=secret)
    scan_ticket("basura", find, now=2500, secret=secret)

    events = read_events()
    scans = [e for e in events if e["action"] == "scan"]
    assert [e["status"] for e in scans] == ["success", "failure", "failure"]
    assert scans[1]["details"] == "expired"
    assert scans[2]["details"] == "malformed"
    raw = open(config.AUDIT_LOG_PATH, encoding="utf-8").read()
    assert ticket.payload.signature not in raw
