"""BabyBear field GF(p) and Montgomery-form conversion.

Uses galois library for the field arithmetic. FF is the field type.

The proving system stores field elements internally in Montgomery form
(x * R mod p with R = 2^32), and its bitcode serialization writes that
internal u32 verbatim. Anything we hand to the portable verifier must therefore
be converted canonical -> Montgomery first. The reverse direction is never
needed here: the verifier decodes Montgomery form itself.
"""

from typing import List

import galois

# --- Field Construction ---

BABYBEAR_PRIME = 2013265921  # 2^31 - 2^27 + 1
"""BabyBear modulus p."""

MONTY_BITS = 32
MONTY_R = 1 << MONTY_BITS
"""Montgomery radix R = 2^32."""

FF = galois.GF(BABYBEAR_PRIME)
"""Base field GF(p) - BabyBear prime field."""

# R reduced into the field: 2^32 mod p = 268435454
MONTY_R_FF = FF(MONTY_R % BABYBEAR_PRIME)


# --- Canonical -> Montgomery ---

def _check_canonical(value: int) -> int:
    value = int(value)
    if not 0 <= value < BABYBEAR_PRIME:
        raise ValueError(
            f"canonical field element must be in [0, {BABYBEAR_PRIME}), got {value}"
        )
    return value


def to_montgomery(canonical: int) -> int:
    """Convert a canonical BabyBear element to Montgomery form: (x * 2^32) mod p.

    The caller must already have reduced mod p. Out-of-range input is a
    contract violation and raises instead of being silently re-reduced.
    """
    return int(FF(_check_canonical(canonical)) * MONTY_R_FF)


def to_montgomery_batch(values: List[int]) -> List[int]:
    """Vectorized to_montgomery() over a list of canonical elements."""
    if not values:
        return []
    arr = FF([_check_canonical(v) for v in values]) * MONTY_R_FF
    return [int(v) for v in arr]
