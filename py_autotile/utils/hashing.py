"""
Deterministic position hashing utilities.

Tile synthesis must be byte-identical across runs and platforms, so the
craggy line style never touches Python's random or NumPy's random. Every
"random" value is a fixed linear-congruential mix of an integer key derived
from the sample position.
"""

# Classic LCG constants, matching the coast16 craggy style output
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def lcg_mix(key: int) -> int:
    """
    Mix an integer key into the range [0, LCG_MODULUS).

    Args:
        key: Position-derived integer key (may be negative)

    Returns:
        Integer in [0, LCG_MODULUS)
    """
    return (int(key) * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS


def lcg_unit(key: int) -> float:
    """Map an integer key to a deterministic float in [0, 1)."""
    return lcg_mix(key) / LCG_MODULUS


def lcg_sign(key: int) -> int:
    """Return -1 or +1 for an integer key."""
    return -1 if lcg_unit(key) < 0.5 else 1
