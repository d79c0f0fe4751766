"""
Design (utils.py)
- Purpose: Reusable helpers: record id / timestamp generation, coordinate parsing and
           formatting, timestamp display.
- Inputs: Various helper parameters.
- Outputs: Helper results (strings, numbers).
- Side effects: None (new_record_id / now_ms read the RNG and the clock).
- Thread-safety: Stateless; safe to call from any thread.
"""

import math
import random
import string
import time
from datetime import datetime
from decimal import Decimal

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 7


def new_record_id(rng: random.Random | None = None) -> str:
    """
    Purpose: Short random alphanumeric token for a new record.
    Inputs: rng (optional, for deterministic tests).
    Outputs: 7 lowercase letters/digits. Collisions are irrelevant at this scale.
    """
    rng = rng or random
    return "".join(rng.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def parse_coordinate(raw: str) -> float | None:
    """
    Purpose: Turn form text into an optional coordinate.
    Inputs: raw text ('' or whitespace means absent).
    Outputs: float, or None when empty.
    Raises: ValueError when non-empty text is not a number.
    """
    raw = (raw or "").strip()
    if not raw:
        return None
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def format_coordinate(value: float | None) -> str:
    """
    Purpose: Shortest plain decimal text for a coordinate ('' when absent, '88' for 88.0,
             '22.5724' kept as-is, '0.00005' never in exponent form).
    """
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def format_timestamp(ms: int, fmt: str) -> str:
    """Render epoch milliseconds as local date-time text with the given strftime format."""
    return datetime.fromtimestamp(ms / 1000).strftime(fmt)
