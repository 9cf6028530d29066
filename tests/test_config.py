"""Tests for SimulationConfig validation and YAML loading."""
import pytest

from quorum.config import (
    EndCondition,
    SimulationConfig,
    SimulationType,
    VotingStrategy,
    load_simulation_config,
)


class TestDefaults:
    def test_project_config_loads(self):
        config = load_simulation_config()
        assert config.loyalists == 16
        assert config.traitors == 4
        assert config.iterations == 1000
        assert config.batch_size == 100
        assert config.end_condition == EndCondition.FIRST_TRAITOR_REMOVED
        assert config.voting_strategy == VotingStrategy.RANDOM
        assert config.simulation_type == SimulationType.RANDOM
        assert config.seed is None

    def test_model_defaults_match(self):
        assert SimulationConfig() == load_simulation_config()


class TestValidation:
    @pytest.mark.parametrize("field", ["loyalists", "traitors"])
    def test_factions_need_one_actor(self, field):
        with pytest.raises(ValueError, match="at least 1 of each faction"):
            SimulationConfig(**{field: 0})

    @pytest.mark.parametrize("field", ["iterations", "batch_size"])
    def test_positive_counts(self, field):
        with pytest.raises(ValueError, match="must be at least 1"):
            SimulationConfig(**{field: -3})

    def test_enum_strings(self):
        config = SimulationConfig(
            end_condition="all_one_type",
            voting_strategy="fixate",
            simulation_type="influence",
        )
        assert config.end_condition == EndCondition.ALL_ONE_TYPE
        assert config.voting_strategy == VotingStrategy.FIXATE
        assert config.simulation_type == SimulationType.INFLUENCE

    def test_unknown_enum_string(self):
        with pytest.raises(ValueError):
            SimulationConfig(voting_strategy="psychic")


class TestLoader:
    def test_loads_custom_file(self, tmp_path):
        path = tmp_path / "sim.yaml"
        path.write_text("loyalists: 5\ntraitors: 2\nend_condition: all_one_type\nseed: 11\n")
        config = load_simulation_config(path)
        assert config.loyalists == 5
        assert config.traitors == 2
        assert config.end_condition == EndCondition.ALL_ONE_TYPE
        assert config.seed == 11
        assert config.iterations == 1000

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_simulation_config(path) == SimulationConfig()

    def test_invalid_file_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("loyalists: 0\n")
        with pytest.raises(ValueError):
            load_simulation_config(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_simulation_config(tmp_path / "nope.yaml")
