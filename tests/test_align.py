import pytest
from hypothesis import given, settings, strategies as st

from kitbag.align import AlignFlag, AlignResult, QueryProfile, align


def dna_matrix(sa=1, sb=3):
    mat = []
    for i in range(4):
        mat.extend(sa if i == j else -sb for j in range(4))
        mat.append(0)
    mat.extend([0] * 5)
    return mat


MAT = dna_matrix()
GAPO, GAPE = 5, 2

seqs = st.lists(st.integers(min_value=0, max_value=4), min_size=1, max_size=25)


def test_identical_sequences_align_end_to_end():
    q = [0, 1, 2, 3, 2, 1, 0, 3]
    r = align(q, q, 5, MAT, GAPO, GAPE)
    assert r.score == len(q)
    assert r.te == len(q) - 1
    assert r.qe == len(q) - 1


def test_start_positions_of_identical_sequences():
    q = [0, 1, 2, 3, 2, 1, 0, 3]
    r = align(q, q, 5, MAT, GAPO, GAPE, AlignFlag.START)
    assert (r.tb, r.qb) == (0, 0)
    assert (r.te, r.qe) == (len(q) - 1, len(q) - 1)


def test_byte_scores_saturate_at_255():
    q = [0, 1, 2, 3] * 75
    r = align(q, q, 5, MAT, GAPO, GAPE, AlignFlag.BYTE)
    assert r.score == 255
    assert r.qe == -1
    wide = align(q, q, 5, MAT, GAPO, GAPE)
    assert wide.score == len(q)


def test_no_positive_score_leaves_defaults():
    r = align([0] * 5, [1] * 5, 5, MAT, GAPO, GAPE)
    assert r.score == 0
    assert r.te == -1
    assert (r.score2, r.te2, r.tb, r.qb) == (-1, -1, -1, -1)


def test_empty_target_scores_zero():
    r = align([0, 1, 2], [], 5, MAT, GAPO, GAPE)
    assert r.score == 0
    assert r.te == -1


def test_second_best_hit_is_reported():
    q = [0, 1, 2, 3] * 2
    t = q + [0] * 20 + q
    r = align(q, t, 5, MAT, GAPO, GAPE, AlignFlag.SUBO | 7)
    assert r.score == len(q)
    assert r.te == len(q) - 1
    assert r.score2 == r.score
    assert r.te2 == len(t) - 1


def test_stop_threshold_ends_early():
    q = [0, 1, 2, 3, 1, 2, 0, 3, 2, 1]
    full = align(q, q, 5, MAT, GAPO, GAPE)
    early = align(q, q, 5, MAT, GAPO, GAPE, AlignFlag.STOP | 3)
    assert 3 <= early.score <= full.score
    assert early.te <= full.te
    assert early.score < full.score


def test_profile_reuse_matches_fresh_profile():
    q = [0, 1, 2, 3, 3, 2]
    profile = QueryProfile(q, 5, MAT)
    for t in ([3, 0, 1, 2, 3, 3, 2, 1], [2, 2, 0, 1, 2]):
        assert align(q, t, 5, MAT, GAPO, GAPE, profile=profile) == align(q, t, 5, MAT, GAPO, GAPE)


def test_byte_profile_selects_byte_scoring():
    q = [0, 1, 2, 3] * 75
    profile = QueryProfile(q, 5, MAT, size=1)
    r = align(q, q, 5, MAT, GAPO, GAPE, profile=profile)
    assert r.score == 255


def test_start_search_leaves_inputs_untouched():
    q = [3, 0, 1, 2, 2]
    t = [1, 1, 0, 1, 2, 2, 0]
    q_copy, t_copy = list(q), list(t)
    r = align(q, t, 5, MAT, GAPO, GAPE, AlignFlag.START)
    assert q == q_copy and t == t_copy
    assert r.tb >= 0 and r.qb >= 0


def test_query_residue_out_of_range():
    with pytest.raises(ValueError):
        align([0, 5], [0, 1], 5, MAT, GAPO, GAPE)


def test_target_residue_out_of_range():
    with pytest.raises(ValueError):
        align([0, 1], [0, 9], 5, MAT, GAPO, GAPE)


def test_empty_query_rejected():
    with pytest.raises(ValueError):
        QueryProfile([], 5, MAT)


def test_short_matrix_rejected():
    with pytest.raises(ValueError):
        align([0, 1], [0, 1], 5, MAT[:10], GAPO, GAPE)


def test_matrix_entries_must_fit_a_byte():
    bad = list(MAT)
    bad[0] = 200
    with pytest.raises(ValueError):
        QueryProfile([0, 1], 5, bad)


@settings(max_examples=40, deadline=None)
@given(seqs, seqs)
def test_byte_and_word_scoring_agree(q, t):
    narrow = align(q, t, 5, MAT, GAPO, GAPE, AlignFlag.BYTE)
    wide = align(q, t, 5, MAT, GAPO, GAPE)
    assert (narrow.score, narrow.te) == (wide.score, wide.te)


@settings(max_examples=40, deadline=None)
@given(seqs, seqs)
def test_score_is_symmetric_under_swap(q, t):
    assert align(q, t, 5, MAT, GAPO, GAPE).score == align(t, q, 5, MAT, GAPO, GAPE).score


@settings(max_examples=40, deadline=None)
@given(seqs, seqs)
def test_score_is_invariant_under_reversal(q, t):
    forward = align(q, t, 5, MAT, GAPO, GAPE)
    backward = align(q[::-1], t[::-1], 5, MAT, GAPO, GAPE)
    assert forward.score == backward.score


@settings(max_examples=40, deadline=None)
@given(
    st.lists(st.integers(min_value=0, max_value=3), min_size=1, max_size=15),
    st.lists(st.integers(min_value=0, max_value=4), max_size=10),
    st.lists(st.integers(min_value=0, max_value=4), max_size=10),
)
def test_start_positions_bound_an_equally_scoring_alignment(q, prefix, suffix):
    t = prefix + q + suffix
    r = align(q, t, 5, MAT, GAPO, GAPE, AlignFlag.START)
    assert r.score >= len(q)
    assert 0 <= r.tb <= r.te
    assert 0 <= r.qb <= r.qe
    sub = align(q[r.qb:r.qe + 1], t[r.tb:r.te + 1], 5, MAT, GAPO, GAPE)
    assert sub.score == r.score


def test_result_defaults_match_unset_markers():
    r = AlignResult()
    assert (r.score, r.te, r.qe, r.score2, r.te2, r.tb, r.qb) == (0, -1, -1, -1, -1, -1, -1)