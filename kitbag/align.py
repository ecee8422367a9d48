"""Local (Smith-Waterman) alignment with affine gaps over striped score vectors.

The query is cut into ``slen`` segments that are laid out across the lanes of
fixed-width score vectors: 16 unsigned byte lanes, or 8 signed 16-bit lanes.
Position ``k`` of the query lives in segment ``k % slen`` and lane
``k // slen``. The byte variant saturates at 255 and reports such a score as
255. Gap runs along the query are settled by a "lazy F" pass after each row.

Sequences are residue codes in ``range(m)``. ``mat`` is the ``m*m`` scoring
matrix given row by row, with entries in the signed byte range. A gap of
length ``l`` costs ``gapo + l * gape``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

_INT16_MIN = -0x8000
_INT16_MAX = 0x7FFF


class AlignFlag(enum.IntFlag):
    """Options for :func:`align`; the low 16 bits of ``xtra`` hold a threshold."""

    NONE = 0
    BYTE = 0x10000  # use unsigned byte scores; overflow is reported as 255
    STOP = 0x20000  # stop once the best score reaches the threshold
    SUBO = 0x40000  # track the second best score above the threshold
    START = 0x80000  # also find the start positions


@dataclass(frozen=True)
class AlignResult:
    """Outcome of an alignment; positions are inclusive and unset ones are -1."""

    score: int = 0
    te: int = -1
    qe: int = -1
    score2: int = -1
    te2: int = -1
    tb: int = -1
    qb: int = -1


def _check_matrix(m: int, mat: Sequence[int]) -> List[int]:
    if m <= 0:
        raise ValueError("alphabet size must be positive")
    if len(mat) < m * m:
        raise ValueError(f"scoring matrix needs {m * m} entries, got {len(mat)}")
    entries = [int(v) for v in mat[: m * m]]
    if any(not -128 <= v <= 127 for v in entries):
        raise ValueError("scoring matrix entries must lie in -128..127")
    return entries


def _check_residues(seq: Sequence[int], m: int, name: str) -> None:
    if any(not 0 <= c < m for c in seq):
        raise ValueError(f"{name} holds a residue outside 0..{m - 1}")


class QueryProfile:
    """Per-residue striped score vectors for one query.

    A profile can be built once and handed to :func:`align` for every target
    the query is aligned against. ``size`` 1 selects byte scores, anything
    larger 16-bit scores.
    """

    def __init__(self, query: Sequence[int], m: int, mat: Sequence[int], size: int = 2) -> None:
        entries = _check_matrix(m, mat)
        query = list(query)
        if not query:
            raise ValueError("query must not be empty")
        _check_residues(query, m, "query")
        self.m = m
        self.size = 2 if size > 1 else 1
        self.lanes = 8 * (3 - self.size)
        self.qlen = len(query)
        self.slen = (self.qlen + self.lanes - 1) // self.lanes
        low = min(127, min(entries))
        self.max = max(0, max(entries))
        self.shift = (-low) & 0xFF if self.size == 1 else 0
        profile = []
        for a in range(m):
            row = entries[a * m:(a + 1) * m]
            segments = []
            for i in range(self.slen):
                lane_scores = (
                    row[query[k]] if k < self.qlen else 0
                    for k in range(i, self.slen * self.lanes, self.slen)
                )
                if self.size == 1:
                    segments.append(tuple((v + self.shift) & 0xFF for v in lane_scores))
                else:
                    segments.append(tuple(lane_scores))
            profile.append(tuple(segments))
        self.profile: Tuple[Tuple[Tuple[int, ...], ...], ...] = tuple(profile)


def _thresholds(xtra: int) -> Tuple[int, int]:
    minsc = xtra & 0xFFFF if xtra & AlignFlag.SUBO else 0x10000
    endsc = xtra & 0xFFFF if xtra & AlignFlag.STOP else 0x10000
    return minsc, endsc


def _record(b: List[List[int]], imax: int, i: int, minsc: int) -> None:
    """Keep the best score of each run of consecutive rows scoring at least ``minsc``."""
    if imax < minsc:
        return
    if not b or b[-1][1] + 1 != i:
        b.append([imax, i])
    elif b[-1][0] < imax:
        b[-1] = [imax, i]


def _query_end(hmax: List[List[int]], slen: int) -> int:
    best, qe = -1, -1
    for j, vec in enumerate(hmax):
        for lane, v in enumerate(vec):
            v &= 0xFFFF
            if v > best:
                best, qe = v, j + lane * slen
    return qe


def _second_best(b: List[List[int]], score: int, te: int, qmax: int) -> Tuple[int, int]:
    span = (score + max(qmax, 1) - 1) // max(qmax, 1)
    low, high = te - span, te + span
    score2, te2 = -1, -1
    for sc, e in b:
        if (e < low or e > high) and sc > score2:
            score2, te2 = sc, e
    return score2, te2


def _lazy_f_u8(h1: List[List[int]], f: List[int], gapoe: int, gape: int) -> None:
    for _ in range(16):
        f = [0] + f[:-1]
        for j, stored in enumerate(h1):
            h = list(map(max, stored, f))
            h1[j] = h
            h = [max(a - gapoe, 0) for a in h]
            f = [max(a - gape, 0) for a in f]
            if all(a <= c for a, c in zip(f, h)):
                return


def _sw_u8(q: QueryProfile, target: Sequence[int], gapo: int, gape: int, xtra: int) -> AlignResult:
    minsc, endsc = _thresholds(xtra)
    slen, shift = q.slen, q.shift
    gapoe = (gapo + gape) & 0xFF
    ge = gape & 0xFF
    zero = [0] * q.lanes
    e_vecs = [zero] * slen
    h0 = [zero] * slen
    h1 = [zero] * slen
    hmax = [zero] * slen
    gmax, te = 0, -1
    b: List[List[int]] = []
    for i, t in enumerate(target):
        f = zero
        mx = zero
        h = [0] + h0[-1][:-1]
        for j, s in enumerate(q.profile[t]):
            h = [max(min(a + c, 255) - shift, 0) for a, c in zip(h, s)]
            e = e_vecs[j]
            h = [max(a, c, d) for a, c, d in zip(h, e, f)]
            mx = list(map(max, mx, h))
            h1[j] = h
            h = [max(a - gapoe, 0) for a in h]
            e_vecs[j] = [max(a - ge, 0, c) for a, c in zip(e, h)]
            f = [max(a - ge, 0, c) for a, c in zip(f, h)]
            h = h0[j]
        _lazy_f_u8(h1, f, gapoe, ge)
        imax = max(mx)
        _record(b, imax, i, minsc)
        if imax > gmax:
            gmax, te = imax, i
            hmax = list(h1)
            if gmax + shift >= 255 or gmax >= endsc:
                break
        h0, h1 = h1, h0
    score = gmax if gmax + shift < 255 else 255
    if score == 255:
        return AlignResult(score=score, te=te)
    qe = _query_end(hmax, slen)
    score2, te2 = _second_best(b, score, te, q.max) if b else (-1, -1)
    return AlignResult(score=score, te=te, qe=qe, score2=score2, te2=te2)


def _adds16(a: int, c: int) -> int:
    return min(max(a + c, _INT16_MIN), _INT16_MAX)


def _subs_u16(a: int, c: int) -> int:
    r = max((a & 0xFFFF) - c, 0)
    return r - 0x10000 if r & 0x8000 else r


def _lazy_f_i16(h1: List[List[int]], f: List[int], gapoe: int, gape: int) -> None:
    for _ in range(16):
        f = [0] + f[:-1]
        for j, stored in enumerate(h1):
            h = list(map(max, stored, f))
            h1[j] = h
            h = [_subs_u16(a, gapoe) for a in h]
            f = [_subs_u16(a, gape) for a in f]
            if not any(a > c for a, c in zip(f, h)):
                return


def _sw_i16(q: QueryProfile, target: Sequence[int], gapo: int, gape: int, xtra: int) -> AlignResult:
    minsc, endsc = _thresholds(xtra)
    slen = q.slen
    gapoe = (gapo + gape) & 0xFFFF
    ge = gape & 0xFFFF
    zero = [0] * q.lanes
    e_vecs = [zero] * slen
    h0 = [zero] * slen
    h1 = [zero] * slen
    hmax = [zero] * slen
    gmax, te = 0, -1
    b: List[List[int]] = []
    for i, t in enumerate(target):
        f = zero
        mx = zero
        h = [0] + h0[-1][:-1]
        for j, s in enumerate(q.profile[t]):
            h = [_adds16(a, c) for a, c in zip(h, s)]
            e = e_vecs[j]
            h = [max(a, c, d) for a, c, d in zip(h, e, f)]
            mx = list(map(max, mx, h))
            h1[j] = h
            h = [_subs_u16(a, gapoe) for a in h]
            e_vecs[j] = [max(_subs_u16(a, ge), c) for a, c in zip(e, h)]
            f = [max(_subs_u16(a, ge), c) for a, c in zip(f, h)]
            h = h0[j]
        _lazy_f_i16(h1, f, gapoe, ge)
        imax = max(mx) & 0xFFFF
        _record(b, imax, i, minsc)
        if imax > gmax:
            gmax, te = imax, i
            hmax = list(h1)
            if gmax >= endsc:
                break
        h0, h1 = h1, h0
    qe = _query_end(hmax, slen)
    score2, te2 = _second_best(b, gmax, te, q.max) if b else (-1, -1)
    return AlignResult(score=gmax, te=te, qe=qe, score2=score2, te2=te2)


def align(
    query: Sequence[int],
    target: Sequence[int],
    m: int,
    mat: Sequence[int],
    gapo: int,
    gape: int,
    xtra: int = 0,
    profile: Optional[QueryProfile] = None,
) -> AlignResult:
    """Locally align ``query`` against ``target``.

    ``xtra`` combines :class:`AlignFlag` bits with a threshold in its low 16
    bits. When ``profile`` is given it is used instead of building one from
    ``query``; it must describe the same query.
    """
    query = list(query)
    target = list(target)
    if profile is None:
        profile = QueryProfile(query, m, mat, 1 if xtra & AlignFlag.BYTE else 2)
    _check_residues(target, profile.m, "target")
    run = _sw_i16 if profile.size == 2 else _sw_u8
    r = run(profile, target, gapo, gape, xtra)
    if not xtra & AlignFlag.START or (xtra & AlignFlag.SUBO and r.score < (xtra & 0xFFFF)):
        return r
    if r.qe < 0:  # the score overflowed; no end position to search back from
        return r
    rev_query = query[: r.qe + 1][::-1]
    rev_target = target[: r.te + 1][::-1] + target[r.te + 1:]
    rev_profile = QueryProfile(rev_query, m, mat, profile.size)
    rr = run(rev_profile, rev_target, gapo, gape, AlignFlag.STOP | r.score)
    if rr.score == r.score:
        return replace(r, tb=r.te - rr.te, qb=r.qe - rr.qe)
    return r