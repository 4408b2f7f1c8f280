import time

import numpy as np
import pytest

from decomo.engine.algorithm.config import MOEADConfig
from decomo.engine.algorithm.moead import MOEAD, Phase
from decomo.foundation.exceptions import ConfigurationError, EvaluationError, StateError
from decomo.foundation.problem import ConvexBiObjective, DTLZ2Problem, Problem, ZDT1Problem
from decomo.hooks import StatusHistory


def _config(pop_size=21, neighbor_size=5, delta=0.9, replace_limit=2, **extra):
    builder = (
        MOEADConfig()
        .pop_size(pop_size)
        .neighbor_size(neighbor_size)
        .delta(delta)
        .replace_limit(replace_limit)
        .crossover("de", cr=1.0, f=0.5)
        .mutation("pm", prob="1/n", eta=20.0)
    )
    for key, value in extra.items():
        getattr(builder, key)(value)
    return builder.fixed()


class _FailsAfterInit(Problem):
    """Evaluates the initial batch, then fails on the first single-solution call."""

    def __init__(self):
        self.n_var = 2
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, X):
        if X.shape[0] == 1:
            raise ValueError("license server unavailable")
        return np.column_stack([X[:, 0], 1.0 - X[:, 1]])


class _SlowInitialBatch(Problem):
    """Spends 300 ms on the initial batch; single offspring evaluate instantly."""

    def __init__(self):
        self.n_var = 1
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, X):
        if X.shape[0] > 1:
            time.sleep(0.3)
        return np.column_stack([X[:, 0], 1.0 - np.sqrt(X[:, 0])])


class _BareProblem:
    """Protocol-only problem: no create_solution."""

    n_var = 2
    n_obj = 2
    xl = np.zeros(2)
    xu = np.ones(2)

    def evaluate(self, X, out):
        out["F"] = np.column_stack([X[:, 0], 1.0 - X[:, 0] + X[:, 1]])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_new_engine_is_created_but_not_initialized():
    moead = MOEAD(_config())
    assert moead.phase is Phase.CREATED
    with pytest.raises(StateError):
        moead.step()


def test_config_mapping_is_accepted():
    moead = MOEAD({"pop_size": 11, "neighbor_size": 3})
    assert moead.cfg.pop_size == 11


def test_crossover_needing_more_parents_than_pool_is_rejected():
    with pytest.raises(ConfigurationError) as info:
        MOEAD(_config(n_parents=1))
    assert info.value.details["required"] == 3


def test_neighborhood_too_small_for_selection_is_rejected():
    with pytest.raises(ConfigurationError):
        MOEAD(_config(neighbor_size=1))


def test_unknown_operator_is_rejected():
    cfg = MOEADConfig().pop_size(10).neighbor_size(3).delta(0.9).replace_limit(2).crossover("blx").mutation("pm").fixed()
    with pytest.raises(ConfigurationError):
        MOEAD(cfg)


def test_weight_count_must_match_pop_size():
    moead = MOEAD(_config(pop_size=14))
    with pytest.raises(ConfigurationError):
        moead.run(DTLZ2Problem(n_var=7, n_obj=3), ("n_eval", 100), seed=0)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


def test_initialize_evaluates_population_and_sets_ideal():
    moead = MOEAD(_config())
    status = moead.initialize(ZDT1Problem(n_var=4), ("n_eval", 100), seed=3)
    st = moead.state
    assert moead.phase is Phase.INITIALIZED
    assert status.evaluations == 21
    assert status.generation == 0
    assert len(st.population) == 21
    assert all(s.evaluated for s in st.population)
    np.testing.assert_allclose(st.ideal, st.F.min(axis=0))
    assert len({id(s) for s in st.population}) == 21


def test_initialize_without_create_solution_samples_within_bounds():
    moead = MOEAD(_config(pop_size=10, neighbor_size=3))
    moead.initialize(_BareProblem(), ("n_eval", 50), seed=0)
    X = moead.state.X
    assert X.shape == (10, 2)
    assert np.all((X >= 0.0) & (X <= 1.0))


# ---------------------------------------------------------------------------
# ask / tell
# ---------------------------------------------------------------------------


def test_ask_returns_unevaluated_offspring_for_a_subproblem():
    moead = MOEAD(_config())
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=1)
    child = moead.ask()
    assert not child.evaluated
    assert 0 <= moead.state.pending_subproblem < 21


def test_ask_twice_without_tell_is_an_error():
    moead = MOEAD(_config())
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=1)
    moead.ask()
    with pytest.raises(StateError):
        moead.ask()


def test_tell_without_ask_is_an_error():
    moead = MOEAD(_config())
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=1)
    child = moead.state.population[0].copy()
    with pytest.raises(StateError):
        moead.tell(child)


def test_tell_rejects_unevaluated_offspring():
    moead = MOEAD(_config())
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=1)
    child = moead.ask()
    with pytest.raises(EvaluationError) as info:
        moead.tell(child)
    assert info.value.details["subproblem"] == moead.state.pending_subproblem


def test_dominating_offspring_is_capped_by_replace_limit():
    moead = MOEAD(_config(delta=1.0, replace_limit=2))
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=2)
    st = moead.state
    child = moead.ask()
    idx = st.pending_subproblem
    child.objectives = np.array([-1.0, -1.0])
    before = list(st.population)

    replaced = moead.tell(child)

    assert replaced == 2
    changed = [k for k in range(st.pop_size) if st.population[k] is not before[k]]
    assert len(changed) == 2
    assert set(changed) <= set(st.neighbors[idx].tolist())
    np.testing.assert_allclose(st.ideal, [-1.0, -1.0])


def test_replacements_are_independent_copies():
    moead = MOEAD(_config(delta=1.0, replace_limit=5))
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=2)
    st = moead.state
    child = moead.ask()
    idx = st.pending_subproblem
    child.objectives = np.array([-1.0, -1.0])

    assert moead.tell(child) == 5
    slots = [st.population[int(k)] for k in st.neighbors[idx]]
    assert all(s is not child for s in slots)
    assert len({id(s) for s in slots}) == 5
    slots[0].variables[0] = 42.0
    assert all(s.variables[0] != 42.0 for s in slots[1:])


def test_population_source_replaces_across_whole_population():
    moead = MOEAD(_config(delta=0.0, replace_limit=100))
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=4)
    child = moead.ask()
    child.objectives = np.array([-1.0, -1.0])
    assert moead.tell(child) == 21


def test_dominated_offspring_replaces_nothing():
    moead = MOEAD(_config(delta=0.0, replace_limit=100))
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=4)
    before = moead.state.F.copy()
    child = moead.ask()
    child.objectives = np.array([10.0, 10.0])
    assert moead.tell(child) == 0
    np.testing.assert_array_equal(moead.state.F, before)


def test_tell_counts_one_evaluation_per_offspring():
    moead = MOEAD(_config())
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=5)
    for _ in range(3):
        child = moead.ask()
        child.objectives = np.array([child.variables[0], 1.0 - np.sqrt(child.variables[0])])
        moead.tell(child)
    assert moead.state.evaluations == 24
    assert moead.state.generation == 3


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


def test_run_result_contents():
    result = MOEAD(_config()).run(ConvexBiObjective(), ("n_eval", 300), seed=0)
    assert set(result) >= {"X", "F", "population", "weights", "ideal", "evaluations", "generations", "computing_time"}
    assert result["X"].shape == (21, 1)
    assert result["F"].shape == (21, 2)
    assert result["weights"].shape == (21, 2)
    assert result["evaluations"] == 300
    assert result["generations"] == 279
    assert result["computing_time"] >= 0


def test_run_moves_to_terminated_and_forbids_further_steps():
    moead = MOEAD(_config())
    moead.run(ConvexBiObjective(), ("n_eval", 50), seed=0)
    assert moead.phase is Phase.TERMINATED
    with pytest.raises(StateError):
        moead.ask()


def test_termination_is_checked_before_the_first_step():
    result = MOEAD(_config()).run(ConvexBiObjective(), ("n_eval", 10), seed=0)
    assert result["evaluations"] == 21
    assert result["generations"] == 0


def test_time_budget_includes_initial_evaluation():
    result = MOEAD(_config()).run(_SlowInitialBatch(), ("max_time", 100), seed=0)
    assert result["generations"] == 0
    assert result["evaluations"] == 21
    assert result["computing_time"] >= 300


def test_run_with_predicate_termination():
    result = MOEAD(_config()).run(ConvexBiObjective(), lambda status: status.generation >= 7, seed=0)
    assert result["generations"] == 7


def test_same_seed_same_result():
    a = MOEAD(_config()).run(ZDT1Problem(n_var=5), ("n_eval", 400), seed=9)
    b = MOEAD(_config()).run(ZDT1Problem(n_var=5), ("n_eval", 400), seed=9)
    np.testing.assert_array_equal(a["X"], b["X"])
    np.testing.assert_array_equal(a["F"], b["F"])


def test_replace_limit_zero_freezes_population():
    moead = MOEAD(_config(replace_limit=0))
    moead.initialize(ZDT1Problem(n_var=3), ("n_eval", 200), seed=1)
    before = moead.state.X.copy()
    while not moead.should_stop():
        assert moead.step() == 0
    np.testing.assert_array_equal(moead.state.X, before)


def test_evaluation_failure_mid_run_carries_context():
    with pytest.raises(EvaluationError) as info:
        MOEAD(_config()).run(_FailsAfterInit(), ("n_eval", 100), seed=0)
    details = info.value.details
    assert 0 <= details["subproblem"] < 21
    assert details["generation"] == 0
    assert isinstance(info.value.__cause__, ValueError)


def test_observers_receive_status_after_init_and_each_step():
    history = StatusHistory()
    moead = MOEAD(_config(), observers=[history])
    result = moead.run(ConvexBiObjective(), ("n_eval", 100), seed=0)
    assert len(history) == 1 + result["generations"]
    assert history.evaluations == list(range(21, 101))
    assert history.last.as_dict()["EVALUATIONS"] == 100


def test_add_observer():
    calls = []
    moead = MOEAD(_config())
    moead.add_observer(calls.append)
    moead.initialize(ConvexBiObjective(), ("n_eval", 100), seed=0)
    moead.step()
    assert [s.evaluations for s in calls] == [21, 22]


def test_observer_exceptions_propagate():
    def broken(status):
        raise RuntimeError("plot window closed")

    with pytest.raises(RuntimeError):
        MOEAD(_config(), observers=[broken]).run(ConvexBiObjective(), ("n_eval", 100), seed=0)


@pytest.mark.parametrize("sequencer", ["permutation", "random", "cyclic"])
def test_every_sequencer_drives_a_run(sequencer):
    result = MOEAD(_config(sequencer=sequencer)).run(ConvexBiObjective(), ("n_eval", 120), seed=0)
    assert result["evaluations"] == 120


@pytest.mark.parametrize("aggregation", ["tschebyscheff", "weighted_sum", "modified_tschebyscheff"])
def test_every_aggregation_drives_a_run(aggregation):
    result = MOEAD(_config(aggregation=aggregation)).run(ZDT1Problem(n_var=4), ("n_eval", 120), seed=0)
    assert np.all(np.isfinite(result["F"]))


def test_run_logs_start_and_end(caplog):
    caplog.set_level("INFO", logger="decomo")
    MOEAD(_config()).run(ConvexBiObjective(), ("n_eval", 40), seed=0)
    assert "Starting MOEA/D on ConvexBiObjective" in caplog.text
    assert "MOEA/D finished: 40 evaluations" in caplog.text
