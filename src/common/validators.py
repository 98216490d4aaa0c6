# funciones de validacion para parametros de seguridad y campos de reservas/tickets

# funcion para verificar que la longitud de bits cumple el minimo requerido
def ensure_min_bits(bits: int, min_bits: int, name: str):
    if bits < min_bits:
        raise ValueError(f"{name}: longitud mínima {min_bits} bits.")

# un identificador es un str no vacio (sin coercion: 42 no es "42")
# los surrogates sueltos (p.ej. "\ud800" escapado en JSON) no se pueden codificar en UTF-8
def is_identifier(value) -> bool:
    if type(value) is not str or value.strip() == "":
        return False
    return not any("\ud800" <= c <= "\udfff" for c in value)

# un instante es un entero de milisegundos (bool es subclase de int y se rechaza)
def is_timestamp(value) -> bool:
    return type(value) is int

# funcion para verificar que un identificador es valido
def ensure_identifier(value, name: str) -> str:
    if not is_identifier(value):
        raise ValueError(f"El campo '{name}' es obligatorio y debe ser un texto no vacío")
    return value

# funcion para verificar que un instante es valido
def ensure_timestamp(value, name: str) -> int:
    if not is_timestamp(value):
        raise ValueError(f"El campo '{name}' debe ser un entero (milisegundos desde epoch)")
    return value

# funcion para verificar que la ventana de la reserva es coherente
def ensure_time_window(start_time: int, end_time: int):
    if start_time >= end_time:
        raise ValueError("La hora de inicio debe ser anterior a la hora de fin.")
