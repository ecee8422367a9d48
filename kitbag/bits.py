"""Bit-twiddling helpers on fixed-width unsigned integers."""

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_M1 = 0x5555555555555555
_M2 = 0x3333333333333333
_M4 = 0x0F0F0F0F0F0F0F0F
_H01 = 0x0101010101010101


def _sum_pairs(y: int) -> int:
    y = (y & _M2) + ((y >> 2) & _M2)
    return ((((y + (y >> 4)) & _M4) * _H01) & _MASK64) >> 56


def popcount64(y: int) -> int:
    """Return the number of set bits in the low 64 bits of ``y``."""
    y &= _MASK64
    y -= (y >> 1) & _M1
    return _sum_pairs(y)


def dna_count64(y: int, c: int) -> int:
    """Count occurrences of base code ``c`` (0-3) among 32 two-bit bases packed in ``y``."""
    y &= _MASK64
    inv = ~y & _MASK64
    high = y if c & 2 else inv
    low = y if c & 1 else inv
    return _sum_pairs((high >> 1) & low & _M1)


def roundup32(x: int) -> int:
    """Round ``x`` up to the next power of two in 32-bit unsigned arithmetic."""
    x = (x - 1) & _MASK32
    for shift in (1, 2, 4, 8, 16):
        x |= x >> shift
    return (x + 1) & _MASK32