"""Tests for the verifier's per-round checks and state machine."""

import pytest

from sumcheck_toolkit.common import (
    ArityMismatch,
    ClaimMismatch,
    ConsistencyMismatch,
    DegreeBoundExceeded,
    FinalCheckMismatch,
    ProtocolMisuse,
    ScriptedRandomSource,
    SeededRandomSource,
    SparsePolynomial,
)
from sumcheck_toolkit.protocol import Prover, Verifier, VerifierState, make_oracle


def univariate(field, coeffs):
    return SparsePolynomial.from_univariate_coefficients(field, coeffs)


@pytest.fixture
def scripted(field):
    return ScriptedRandomSource(field, [2, 3, 5])


def test_honest_session_accepts(g, rng):
    prover = Prover(g)
    verifier = Verifier(make_oracle(g), prover.get_claim(), g.num_vars, rng)

    challenge = None
    for _ in range(g.num_vars):
        challenge = verifier.verify_round(prover.prove_round(challenge))

    assert verifier.accepted
    assert verifier.state is VerifierState.ACCEPT
    assert len(verifier.challenges) == 3
    assert prover.challenges == verifier.challenges[:2]


def test_scripted_transcript(g, field, scripted):
    prover = Prover(g)
    verifier = Verifier(make_oracle(g), 12, 3, scripted)
    assert verifier.verify_round(prover.prove_round()) == 2
    assert verifier.verify_round(prover.prove_round(2)) == 3
    assert verifier.verify_round(prover.prove_round(3)) == 5
    assert verifier.accepted


def test_no_rounds_after_accept(g, field, scripted):
    prover = Prover(g)
    verifier = Verifier(make_oracle(g), 12, 3, scripted)
    challenge = None
    for _ in range(3):
        challenge = verifier.verify_round(prover.prove_round(challenge))
    with pytest.raises(ProtocolMisuse):
        verifier.verify_round(univariate(field, [0]))


class TestRejection:

    def test_claim_mismatch(self, g, field, rng):
        verifier = Verifier(make_oracle(g), 12, 3, rng)
        h_0 = Prover(g).prove_round() + 1
        with pytest.raises(ClaimMismatch) as exc_info:
            verifier.verify_round(h_0)
        assert exc_info.value.round_index == 0
        assert exc_info.value.expected == 12
        assert exc_info.value.actual == 14
        assert verifier.rejected

    def test_rejection_is_final(self, g, field, rng):
        verifier = Verifier(make_oracle(g), 13, 3, rng)
        prover = Prover(g)
        with pytest.raises(ClaimMismatch):
            verifier.verify_round(prover.prove_round())
        with pytest.raises(ProtocolMisuse):
            verifier.verify_round(prover.prove_round(1))

    def test_arity_mismatch(self, g, rng):
        verifier = Verifier(make_oracle(g), 12, 3, rng)
        with pytest.raises(ArityMismatch):
            verifier.verify_round(g)
        assert verifier.rejected

    def test_consistency_mismatch(self, g, field, scripted):
        verifier = Verifier(make_oracle(g), 12, 3, scripted)
        verifier.verify_round(Prover(g).prove_round())
        # honest h_1 is X + 34
        with pytest.raises(ConsistencyMismatch) as exc_info:
            verifier.verify_round(univariate(field, [35, 1]))
        assert exc_info.value.round_index == 1
        assert exc_info.value.expected == 69

    def test_final_check_mismatch(self, g, field, scripted):
        prover = Prover(g)
        verifier = Verifier(make_oracle(g), 12, 3, scripted)
        verifier.verify_round(prover.prove_round())
        verifier.verify_round(prover.prove_round(2))
        # 16 + 5X + X(X - 1) agrees with the honest h_2 on {0, 1} only
        forged = univariate(field, [16, 4, 1])
        with pytest.raises(FinalCheckMismatch) as exc_info:
            verifier.verify_round(forged)
        assert exc_info.value.expected == 41
        assert exc_info.value.actual == 61
        assert verifier.rejected

    def test_degree_bound(self, g, rng):
        verifier = Verifier(make_oracle(g), 12, 3, rng, degree_bound=1)
        with pytest.raises(DegreeBoundExceeded):
            verifier.verify_round(Prover(g).prove_round())


def test_oracle_queried_once_with_all_challenges(g, field, scripted):
    calls = []

    def oracle(point):
        calls.append(list(point))
        return g.evaluate(point)

    prover = Prover(g)
    verifier = Verifier(oracle, 12, 3, scripted)
    challenge = None
    for _ in range(3):
        challenge = verifier.verify_round(prover.prove_round(challenge))
    assert calls == [[2, 3, 5]]


@pytest.mark.parametrize("seed", range(10))
def test_shifted_claim_never_accepted(g, field, seed):
    # h_0 + 1/2 sums to the false claim 13; round 1 exposes it
    rng = SeededRandomSource(field, seed)
    verifier = Verifier(make_oracle(g), 13, 3, rng)
    prover = Prover(g)
    verifier.verify_round(prover.prove_round() + field.element(1) / 2)
    with pytest.raises(ConsistencyMismatch):
        verifier.verify_round(prover.prove_round(verifier.challenges[-1]))
    assert not verifier.accepted


def test_invalid_construction(g, rng):
    with pytest.raises(ValueError):
        Verifier(make_oracle(g), 12, 0, rng)
    with pytest.raises(ValueError):
        Verifier(make_oracle(g), 12, 3, rng, degree_bound=-1)


class TestAbortedRounds:

    def test_failing_oracle_rejects_without_recording_challenge(self, g, field, scripted):
        failures = [RuntimeError("oracle unavailable")]

        def oracle(point):
            if failures:
                raise failures.pop()
            return g.evaluate(point)

        prover = Prover(g)
        verifier = Verifier(oracle, 12, 3, scripted)
        verifier.verify_round(prover.prove_round())
        verifier.verify_round(prover.prove_round(2))
        h_2 = prover.prove_round(3)

        with pytest.raises(RuntimeError):
            verifier.verify_round(h_2)
        assert verifier.rejected
        assert verifier.round == 2
        assert verifier.challenges == (2, 3)
        with pytest.raises(ProtocolMisuse):
            verifier.verify_round(h_2)

    def test_exhausted_challenge_source_rejects(self, g, field):
        prover = Prover(g)
        verifier = Verifier(make_oracle(g), 12, 3, ScriptedRandomSource(field, [2]))
        verifier.verify_round(prover.prove_round())
        with pytest.raises(ValueError):
            verifier.verify_round(prover.prove_round(2))
        assert verifier.state is VerifierState.REJECT
        assert verifier.challenges == (2,)


def test_rng_is_exposed(g, rng):
    assert Verifier(make_oracle(g), 12, 3, rng).rng is rng
