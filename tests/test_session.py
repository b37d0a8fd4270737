"""End-to-end sessions through setup_protocol / run_protocol."""

import random

import pytest

from sumcheck_toolkit.common import (
    ClaimMismatch,
    ConsistencyMismatch,
    SparsePolynomial,
    SystemRandomSource,
)
from sumcheck_toolkit.config import ProtocolConfig, create_test_config
from sumcheck_toolkit.lagrange import MultilinearExtension
from sumcheck_toolkit.protocol import run_protocol, setup_protocol


def test_honest_session(g, rng):
    result = run_protocol(g, rng=rng)
    assert result.accepted
    assert result.error is None
    assert result.num_rounds == 3
    assert len(result.challenges) == 3
    assert result.claim == 12
    assert result.round_data[0].round_sum == 12
    assert [rd.challenge for rd in result.round_data] == list(result.challenges)


def test_false_claim_recorded_not_raised(g, rng):
    result = run_protocol(g, claim=13, rng=rng)
    assert not result.accepted
    assert isinstance(result.error, ClaimMismatch)
    assert result.num_rounds == 1
    assert result.round_data[0].challenge is None
    assert result.challenges == ()


def test_intercepted_round_rejected(g, field):
    shift = field.element(1) / 2

    def cheat(i, poly):
        return poly + shift if i == 0 else poly

    result = run_protocol(g, claim=13, config=create_test_config(seed=5), intercept=cheat)
    assert not result.accepted
    assert isinstance(result.error, ConsistencyMismatch)
    assert result.num_rounds == 2


def test_config_field_must_match(g):
    with pytest.raises(ValueError):
        setup_protocol(g, config=ProtocolConfig(prime=73, seed=1))


def test_setup_defaults(g):
    prover, verifier = setup_protocol(g)
    assert verifier.claim == 12
    assert verifier.degree_bound is None
    assert isinstance(verifier.rng, SystemRandomSource)
    assert prover.reducer.num_workers == 1


def test_setup_from_config(g):
    config = ProtocolConfig(prime=71, seed=3, num_workers=2)
    prover, verifier = setup_protocol(g, config=config)
    assert verifier.degree_bound == 3
    assert prover.reducer.num_workers == 2


def test_parallel_session(g):
    result = run_protocol(g, config=ProtocolConfig(prime=71, seed=3, num_workers=2))
    assert result.accepted


def test_reproducible_with_seed(g):
    first = run_protocol(g, config=create_test_config(seed=8))
    second = run_protocol(g, config=create_test_config(seed=8))
    assert first.challenges == second.challenges


def test_multilinear_extension_session(field):
    mle = MultilinearExtension.from_evaluations(field, [3, 7, 2, 5, 1, 8, 4, 6])
    result = run_protocol(mle.to_polynomial(), config=create_test_config())
    assert result.accepted
    assert result.claim == 36


@pytest.mark.parametrize("seed", range(6))
def test_random_polynomials_accepted(field, seed):
    g = SparsePolynomial.random(field, 4, max_degree=3, num_terms=6, rng=random.Random(seed))
    result = run_protocol(g, config=create_test_config(seed=seed))
    assert result.accepted
    assert result.claim == g.sum_over_hypercube()


def test_single_variable_session(field, rng):
    g = SparsePolynomial.from_univariate_coefficients(field, [4, 0, 1])
    result = run_protocol(g, rng=rng)
    assert result.accepted
    assert result.claim == 9
