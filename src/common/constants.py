# constantes compartidas por el emisor y los escaneres
ALGO_HMAC_SHA256 = "HMAC-SHA256"         # autenticacion de los tickets

# discriminador del ticket de acceso (versiona el formato del payload)
TICKET_KIND = "parking_booking.v1"

# claves del payload en el formato de transporte (JSON), en orden canonico
WIRE_FIELDS = (
    "kind",
    "bookingId",
    "locationId",
    "spaceId",
    "userId",
    "validFrom",
    "validUntil",
    "issuedAt",
    "signature",
)
