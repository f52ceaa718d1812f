"""
Purpose: Tracking code generation.
Codes look like RODOVAR4821 / AXD1093: company prefix + 4 random digits.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .models import Company

CODE_MIN = 1000
CODE_MAX = 9999


def generate_unique_code(company: Company, existing_codes: Iterable[str], rng: Optional[random.Random] = None) -> str:
    """
    Pick a code for `company` that is not in `existing_codes`.
    Raises ValueError once every number for the prefix is taken.
    """
    rng = rng or random.Random()
    prefix = Company(company).value
    taken = set(existing_codes)

    free = (CODE_MAX - CODE_MIN + 1) - sum(1 for code in taken if _matches_prefix(code, prefix))
    if free <= 0:
        raise ValueError(f"No tracking codes left for prefix {prefix}")

    while True:
        code = f"{prefix}{rng.randint(CODE_MIN, CODE_MAX)}"
        if code not in taken:
            return code


def _matches_prefix(code: str, prefix: str) -> bool:
    suffix = code[len(prefix):]
    return code.startswith(prefix) and len(suffix) == 4 and suffix.isdigit()
