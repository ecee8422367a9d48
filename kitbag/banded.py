"""Banded dynamic-programming alignment with affine gap penalties.

Sequences are lists of residue codes in ``range(m)``; ``mat`` is an ``m*m``
scoring matrix given row by row. A gap of length ``l`` costs
``gapo + l * gape``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

_MINUS_INF = -0x40000000
_OPS = "MID"


@dataclass(frozen=True)
class ExtendResult:
    """Best extension score and the query and target lengths it covers."""

    score: int
    qle: int
    tle: int


@dataclass(frozen=True)
class GlobalResult:
    """Global alignment score and CIGAR as ``(length, op)`` pairs with op in ``M``, ``I``, ``D``."""

    score: int
    cigar: Tuple[Tuple[int, str], ...]

    @property
    def cigar_string(self) -> str:
        return "".join(f"{length}{op}" for length, op in self.cigar)


def _check(query: Sequence[int], target: Sequence[int], m: int, mat: Sequence[int]) -> None:
    if m <= 0:
        raise ValueError("alphabet size must be positive")
    if len(mat) < m * m:
        raise ValueError(f"scoring matrix needs {m * m} entries, got {len(mat)}")
    for name, seq in (("query", query), ("target", target)):
        if any(not 0 <= c < m for c in seq):
            raise ValueError(f"{name} holds a residue outside 0..{m - 1}")


def _profile(query: Sequence[int], m: int, mat: Sequence[int]) -> List[List[int]]:
    return [[mat[k * m + c] for c in query] for k in range(m)]


def extend(
    query: Sequence[int],
    target: Sequence[int],
    m: int,
    mat: Sequence[int],
    gapo: int,
    gape: int,
    w: int,
    h0: int = 0,
) -> ExtendResult:
    """Extend an alignment that already scores ``h0`` from the start of both sequences."""
    _check(query, target, m, mat)
    if gape <= 0:
        raise ValueError("gap extension penalty must be positive")
    qlen = len(query)
    h0 = max(h0, 0)
    gapoe = gapo + gape
    qp = _profile(query, m, mat)
    eh_h = [0] * (qlen + 2)
    eh_e = [0] * (qlen + 2)
    eh_h[0] = h0
    eh_h[1] = h0 - gapoe if h0 > gapoe else 0
    j = 2
    while j <= qlen and eh_h[j - 1] > gape:
        eh_h[j] = eh_h[j - 1] - gape
        j += 1
    max_score = max(0, max(mat[: m * m]))
    max_gap = max(int((qlen * max_score - gapo) / gape + 1.0), 1)
    w = min(w, max_gap)
    best, max_i, max_j = h0, -1, -1
    beg, end = 0, qlen
    for i, t in enumerate(target):
        f = 0
        row_max = 0
        mj = -1
        q = qp[t]
        h1 = max(h0 - (gapo + gape * (i + 1)), 0)
        beg = max(beg, i - w)
        end = min(end, i + w + 1, qlen)
        for j in range(beg, end):
            h, e = eh_h[j], eh_e[j]
            eh_h[j] = h1
            h = max(h + q[j], e, f)
            h1 = h
            if row_max <= h:
                mj = j
                row_max = h
            h = max(h - gapoe, 0)
            e = max(e - gape, h)
            eh_e[j] = e
            f = max(f - gape, h)
        eh_h[end] = h1
        eh_e[end] = 0
        if row_max == 0:
            break
        if row_max > best:
            best, max_i, max_j = row_max, i, mj
        j = mj
        while j >= beg and eh_h[j]:
            j -= 1
        beg = j + 1
        j = mj + 2
        while j <= end and eh_h[j]:
            j += 1
        end = j
    return ExtendResult(score=best, qle=max_j + 1, tle=max_i + 1)


def _push(cigar: List[List], op: int, length: int) -> None:
    if cigar and cigar[-1][1] == op:
        cigar[-1][0] += length
    else:
        cigar.append([length, op])


def global_align(
    query: Sequence[int],
    target: Sequence[int],
    m: int,
    mat: Sequence[int],
    gapo: int,
    gape: int,
    w: int,
) -> GlobalResult:
    """Align the whole of ``query`` against the whole of ``target`` within band ``w``."""
    _check(query, target, m, mat)
    qlen, tlen = len(query), len(target)
    gapoe = gapo + gape
    n_col = min(qlen, 2 * w + 1)
    z = [bytearray(n_col) for _ in range(tlen)]
    qp = _profile(query, m, mat)
    eh_h = [_MINUS_INF] * (qlen + 1)
    eh_e = [_MINUS_INF] * (qlen + 1)
    eh_h[0] = 0
    for j in range(1, min(qlen, w) + 1):
        eh_h[j] = -(gapo + gape * j)
    for i, t in enumerate(target):
        f = _MINUS_INF
        q = qp[t]
        zi = z[i]
        beg = i - w if i > w else 0
        end = min(i + w + 1, qlen)
        h1 = -(gapo + gape * (i + 1)) if beg == 0 else _MINUS_INF
        for j in range(beg, end):
            h, e = eh_h[j], eh_e[j]
            eh_h[j] = h1
            h += q[j]
            d = 0 if h > e else 1
            h = max(h, e)
            if h <= f:
                d = 2
            h = max(h, f)
            h1 = h
            h -= gapoe
            e -= gape
            if e > h:
                d |= 1 << 2
            e = max(e, h)
            eh_e[j] = e
            f -= gape
            if f > h:
                d |= 2 << 4
            f = max(f, h)
            zi[j - beg] = d
        eh_h[end] = h1
        eh_e[end] = _MINUS_INF
    score = eh_h[qlen]

    cigar: List[List] = []
    which = 0
    i = tlen - 1
    k = min(i + w + 1, qlen) - 1
    while i >= 0 and k >= 0:
        beg = i - w if i > w else 0
        which = z[i][k - beg] >> (which << 1) & 3
        if which == 0:
            _push(cigar, 0, 1)
            i -= 1
            k -= 1
        elif which == 1:
            _push(cigar, 2, 1)
            i -= 1
        else:
            _push(cigar, 1, 1)
            k -= 1
    if i >= 0:
        _push(cigar, 2, i + 1)
    if k >= 0:
        _push(cigar, 1, k + 1)
    cigar.reverse()
    return GlobalResult(score=score, cigar=tuple((length, _OPS[op]) for length, op in cigar))