"""
Utilidades de fechas ISO-8601 para los campos de tiempo de WordPress
"""

from datetime import datetime, timezone

# Campos de tiempo que viajan como cadenas ISO-8601
TIMESTAMP_FIELDS = ('date', 'modified', 'date_gmt', 'modified_gmt')


def now() -> datetime:
    """Fecha actual con zona horaria (UTC)"""
    return datetime.now(timezone.utc)


def parse_iso8601(value: str) -> datetime:
    """
    Convierte una cadena ISO-8601 en datetime con zona horaria.

    WordPress envía `date` y `date_gmt` sin desplazamiento
    ("2015-03-04T10:00:00"); esas cadenas se interpretan como UTC.
    """
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_iso8601(value: datetime) -> str:
    """Serializa un datetime a ISO-8601 en UTC con sufijo Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace('+00:00', 'Z')
