import numpy as np
import pytest

from decomo.foundation.exceptions import ConfigurationError
from decomo.foundation.solution import Solution
from decomo.operators.real import (
    DifferentialEvolutionCrossover,
    NullMutation,
    PolynomialMutation,
    SBXCrossover,
)
from decomo.operators.real.utils import resolve_prob_expression


def _sol(x, n_obj=2):
    return Solution(variables=np.asarray(x, dtype=float), objectives=np.zeros(n_obj))


def test_de_rand_1_bin_with_cr_one_returns_mutant():
    xl, xu = np.full(3, -10.0), np.full(3, 10.0)
    op = DifferentialEvolutionCrossover(cr=1.0, f=0.5, lower=xl, upper=xu)
    pool = [_sol([1.0, 2.0, 3.0]), _sol([0.0, 0.0, 1.0]), _sol([5.0, 5.0, 5.0])]
    anchor = _sol([9.0, 9.0, 9.0])
    op.set_anchor(anchor)
    (child,) = op.execute(pool, np.random.default_rng(0))
    np.testing.assert_allclose(child.variables, [5.5, 6.0, 6.0])
    assert not child.evaluated


def test_de_with_cr_zero_takes_exactly_one_mutant_component():
    xl, xu = np.full(4, -10.0), np.full(4, 10.0)
    op = DifferentialEvolutionCrossover(cr=0.0, f=0.5, lower=xl, upper=xu)
    pool = [_sol([1.0] * 4), _sol([0.0] * 4), _sol([2.0] * 4)]
    op.set_anchor(_sol([0.0] * 4))
    (child,) = op.execute(pool, np.random.default_rng(3))
    assert np.count_nonzero(child.variables) == 1
    assert child.variables.max() == pytest.approx(2.5)


def test_de_clips_to_bounds():
    xl, xu = np.zeros(2), np.ones(2)
    op = DifferentialEvolutionCrossover(cr=1.0, f=1.0, lower=xl, upper=xu)
    pool = [_sol([1.0, 0.0]), _sol([0.0, 1.0]), _sol([1.0, 0.0])]
    op.set_anchor(pool[-1])
    (child,) = op.execute(pool, np.random.default_rng(0))
    np.testing.assert_allclose(child.variables, [1.0, 0.0])


def test_de_exponential_variant_runs():
    xl, xu = np.zeros(5), np.ones(5)
    op = DifferentialEvolutionCrossover(cr=0.5, f=0.5, variant="rand/1/exp", lower=xl, upper=xu)
    rng = np.random.default_rng(1)
    pool = [_sol(rng.random(5)) for _ in range(3)]
    op.set_anchor(pool[-1])
    (child,) = op.execute(pool, rng)
    assert np.all((child.variables >= 0.0) & (child.variables <= 1.0))


def test_de_requires_three_solutions():
    op = DifferentialEvolutionCrossover(lower=np.zeros(2), upper=np.ones(2))
    with pytest.raises(ConfigurationError):
        op.execute([_sol([0.1, 0.1]), _sol([0.2, 0.2])], np.random.default_rng(0))


@pytest.mark.parametrize("kwargs", [{"cr": 1.5}, {"variant": "best/2/bin"}])
def test_de_rejects_bad_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        DifferentialEvolutionCrossover(lower=np.zeros(2), upper=np.ones(2), **kwargs)


def test_sbx_returns_two_children_within_bounds():
    xl, xu = np.zeros(6), np.ones(6)
    op = SBXCrossover(1.0, 15.0, lower=xl, upper=xu)
    rng = np.random.default_rng(4)
    for _ in range(50):
        children = op.execute([_sol(rng.random(6)), _sol(rng.random(6))], rng)
        assert len(children) == 2
        for child in children:
            assert np.all((child.variables >= 0.0) & (child.variables <= 1.0))


def test_sbx_with_zero_probability_copies_parents():
    op = SBXCrossover(0.0, 20.0, lower=np.zeros(2), upper=np.ones(2))
    p1, p2 = _sol([0.1, 0.2]), _sol([0.8, 0.9])
    c1, c2 = op.execute([p1, p2], np.random.default_rng(0))
    np.testing.assert_array_equal(c1.variables, p1.variables)
    assert c1 is not p1


def test_polynomial_mutation_in_place_within_bounds():
    xl, xu = np.full(10, -1.0), np.full(10, 2.0)
    op = PolynomialMutation(1.0, 20.0, lower=xl, upper=xu)
    rng = np.random.default_rng(0)
    sol = _sol(np.full(10, 0.5))
    arr = sol.variables
    op.execute(sol, rng)
    assert sol.variables is arr
    assert np.any(sol.variables != 0.5)
    assert np.all((sol.variables >= -1.0) & (sol.variables <= 2.0))


def test_polynomial_mutation_with_zero_probability_is_identity():
    op = PolynomialMutation(0.0, 20.0, lower=np.zeros(3), upper=np.ones(3))
    sol = _sol([0.2, 0.4, 0.6])
    op.execute(sol, np.random.default_rng(0))
    np.testing.assert_array_equal(sol.variables, [0.2, 0.4, 0.6])


def test_polynomial_mutation_handles_fixed_variables():
    op = PolynomialMutation(1.0, 20.0, lower=np.array([0.5, 0.0]), upper=np.array([0.5, 1.0]))
    sol = _sol([0.5, 0.5])
    op.execute(sol, np.random.default_rng(0))
    assert sol.variables[0] == 0.5


def test_null_mutation():
    sol = _sol([0.3])
    NullMutation().execute(sol, np.random.default_rng(0))
    assert sol.variables[0] == 0.3


def test_bounds_dimension_mismatch():
    op = PolynomialMutation(1.0, lower=np.zeros(3), upper=np.ones(3))
    with pytest.raises(ConfigurationError):
        op.execute(_sol([0.1, 0.2]), np.random.default_rng(0))


def test_inverted_bounds_rejected():
    with pytest.raises(ConfigurationError):
        SBXCrossover(lower=np.ones(2), upper=np.zeros(2))


@pytest.mark.parametrize(
    "value, n_var, expected",
    [(None, 4, 0.25), ("1/n", 4, 0.25), ("2/n", 4, 0.5), ("0.3", 4, 0.3), (0.7, 4, 0.7)],
)
def test_resolve_prob_expression(value, n_var, expected):
    assert resolve_prob_expression(value, n_var, 1.0 / n_var) == pytest.approx(expected)


def test_resolve_prob_expression_rejects_garbage():
    with pytest.raises(ConfigurationError):
        resolve_prob_expression("x/n", 4, 0.25)
