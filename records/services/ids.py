import secrets
import time
from typing import Optional

_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'

PATIENT = 'PAT'
HOSPITAL = 'HOSP'
VISIT = 'VISIT'
STOCK_ALERT = 'ALERT'
EMERGENCY_ALERT = 'EMRG'


def _base36(n: int) -> str:
    if n == 0:
        return '0'
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_ALPHABET[r])
    return ''.join(reversed(digits))


def generate_unique_id(prefix: str, *, now_ms: Optional[int] = None) -> str:
    """Return ``<PREFIX>-<base36 millis>-<6 random base36 chars>``, upper case."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    random_part = ''.join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"{prefix}-{_base36(now_ms)}-{random_part}"
