"""
random_art/seeds.py - Deriving 64-bit grammar seeds from user input
"""
import hashlib
import time
from typing import Optional

SEED_BITS = 64
MAX_SEED = (1 << SEED_BITS) - 1

def seed_from_string(text: str) -> int:
    """Stable across processes, unlike the salted built-in hash()"""
    digest = hashlib.sha256(text.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big')

def seed_from_time(now: Optional[float] = None) -> int:
    """Seed from wall-clock milliseconds"""
    millis = int((time.time() if now is None else now) * 1000)
    return seed_from_string(str(millis))

def parse_seed(value: Optional[str]) -> int:
    """Integers that fit in 64 bits are used as-is, anything else is hashed"""
    if value is None:
        return seed_from_time()
    try:
        seed = int(value)
    except ValueError:
        return seed_from_string(value)
    if 0 <= seed <= MAX_SEED:
        return seed
    return seed_from_string(value)
