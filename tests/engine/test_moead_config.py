import json
from dataclasses import FrozenInstanceError

import pytest

from decomo.engine.algorithm.config import MOEADConfig, MOEADConfigData
from decomo.foundation.exceptions import ConfigurationError, MissingConfigError
from decomo.operators.real import NullMutation


def test_default_config_matches_moead_de_settings():
    cfg = MOEADConfig.default(pop_size=50, n_var=10)
    assert cfg.pop_size == 50
    assert cfg.neighbor_size == 20
    assert cfg.delta == 0.9
    assert cfg.replace_limit == 2
    assert cfg.crossover == ("de", {"cr": 1.0, "f": 0.5})
    assert cfg.mutation == ("pm", {"prob": 0.1, "eta": 20.0})
    assert cfg.aggregation == ("tschebyscheff", {})
    assert cfg.sequencer == "permutation"


def test_default_neighbor_size_is_clamped_for_small_populations():
    assert MOEADConfig.default(pop_size=8).neighbor_size == 8


def test_fluent_builder():
    cfg = (
        MOEADConfig()
        .pop_size(21)
        .neighbor_size(5)
        .delta(0.8)
        .replace_limit(1)
        .crossover("sbx", prob=0.9, eta=15.0)
        .mutation("pm", prob="1/n")
        .aggregation("weighted_sum")
        .sequencer("random")
        .weight_vectors(divisions=20)
        .fixed()
    )
    assert isinstance(cfg, MOEADConfigData)
    assert cfg.crossover == ("sbx", {"prob": 0.9, "eta": 15.0})
    assert cfg.weight_vectors == {"path": None, "divisions": 20}
    assert cfg.sequencer == "random"


def test_operator_instances_are_kept():
    mutation = NullMutation()
    builder = MOEADConfig().pop_size(10).neighbor_size(3).delta(0.9).replace_limit(2)
    cfg = builder.crossover("de").mutation(mutation).fixed()
    assert cfg.mutation is mutation


def test_missing_field_reports_config_class():
    with pytest.raises(MissingConfigError) as info:
        MOEADConfig().pop_size(10).fixed()
    assert "MOEADConfig.default()" in str(info.value)
    assert info.value.details["missing"] == ["neighbor_size", "delta", "replace_limit", "crossover", "mutation"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("pop_size", 0),
        ("neighbor_size", 0),
        ("delta", 1.5),
        ("delta", -0.1),
        ("replace_limit", -1),
    ],
)
def test_out_of_range_values_are_rejected(field, value):
    builder = MOEADConfig().pop_size(10).neighbor_size(3).delta(0.9).replace_limit(2).crossover("de").mutation("pm")
    getattr(builder, field)(value)
    with pytest.raises(ConfigurationError):
        builder.fixed()


def test_replace_limit_zero_is_allowed():
    cfg = MOEADConfig().pop_size(10).neighbor_size(3).delta(0.9).replace_limit(0).crossover("de").mutation("pm").fixed()
    assert cfg.replace_limit == 0


def test_from_dict_accepts_long_names_and_fills_defaults():
    cfg = MOEADConfig.from_dict(
        {
            "population_size": 30,
            "neighbourhood_size": 7,
            "neighborhood_selection_probability": 0.5,
            "maximum_number_of_replaced_solutions": 3,
            "crossover": {"method": "de", "cr": 0.9},
            "aggregation": "weighted_sum",
        }
    )
    assert (cfg.pop_size, cfg.neighbor_size, cfg.delta, cfg.replace_limit) == (30, 7, 0.5, 3)
    assert cfg.crossover == ("de", {"cr": 0.9})
    assert cfg.mutation == ("pm", {})
    assert cfg.aggregation == ("weighted_sum", {})


def test_from_dict_empty_uses_defaults():
    cfg = MOEADConfig.from_dict({})
    assert cfg.pop_size == 100
    assert cfg.neighbor_size == 20


def test_config_serialization():
    cfg = MOEADConfig.default(pop_size=20, n_var=4)
    data = cfg.to_dict()
    assert data["pop_size"] == 20
    assert json.loads(cfg.to_json())["delta"] == 0.9


def test_serialization_renders_operator_instances_by_class_name():
    builder = MOEADConfig().pop_size(10).neighbor_size(3).delta(0.9).replace_limit(2)
    cfg = builder.crossover("de", cr=1.0).mutation(NullMutation()).fixed()
    data = json.loads(cfg.to_json(indent=2))
    assert data["mutation"] == "NullMutation"
    assert data["crossover"] == ["de", {"cr": 1.0}]
    assert data["weight_vectors"] is None


def test_config_is_frozen():
    cfg = MOEADConfig.default(pop_size=20)
    with pytest.raises(FrozenInstanceError):
        cfg.pop_size = 10
