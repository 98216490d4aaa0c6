"""tickets de acceso a plazas de aparcamiento

Este paquete expone la API de emision y verificacion. La implementacion esta en
`codec` (emitir, codificar y decodificar), `verifier` (decidir la validez),
`scanner` (flujo completo de un escaneo) y `bootstrap` (arranque del
proceso: `startup()` carga el secreto compartido); aqui se reexportan sus simbolos para
poder importar directamente `from src.tickets import ...`.
"""
from .models import ReservationRecord, TicketPayload, ScannableTicket
from .codec import issue, decode, encode_payload, canonicalize, compute_signature
from .verifier import verify, VerificationFailure, VerificationResult
from .scanner import scan_ticket
from .bootstrap import startup, new_ticket_secret_hex
