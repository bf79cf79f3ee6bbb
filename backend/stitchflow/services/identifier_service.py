# Overview: Record id and order number generation.

from __future__ import annotations

import random
import time
from typing import Iterable


_last_id = 0


def new_id() -> str:
    """
    Time-based record id: milliseconds since the epoch, as a string.

    Ids requested within the same millisecond are bumped by one so records
    created in a tight loop stay distinct within this process. No
    cross-process uniqueness is attempted.
    """
    global _last_id
    candidate = int(time.time() * 1000)
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)


def next_order_number(existing: Iterable[str], *, attempts: int = 50) -> str:
    """
    Allocate a human-facing order number of the form ORD-nnnn.

    Numbers are drawn at random and redrawn when already taken; after
    `attempts` collisions the number space is widened to five digits.
    """
    taken = set(existing)
    for _ in range(attempts):
        number = f"ORD-{random.randint(0, 9999):04d}"
        if number not in taken:
            return number
    while True:
        number = f"ORD-{random.randint(10000, 99999)}"
        if number not in taken:
            return number
