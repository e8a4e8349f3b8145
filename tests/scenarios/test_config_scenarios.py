"""Scenario-based tests for configuration loading."""

import pytest

from masterylog.config import load_config
from masterylog.constants import HALF_LIFE_DAYS, TIER_SCORES


class TestConfigScenarios:
    """Test scenarios for loading config.yaml and environment overrides."""

    def test_scenario_full_config_file(self, tmp_path, monkeypatch):
        """
        Scenario: An operator ships a complete config file

        Given: A config.yaml setting every section
        When: The configuration is loaded
        Then: Every value is taken from the file
        """
        monkeypatch.delenv("MASTERYLOG_DB_PATH", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "database:\n"
            "  path: custom/progress.db\n"
            "scoring:\n"
            "  half_life_days: 30\n"
            "  tier_scores:\n"
            "    strong: 95\n"
            "    moderate: 55\n"
            "    weak: 15\n"
            "levels:\n"
            "  confident: 85\n"
            "  solid: 70\n"
            "  average: 45\n"
            "  needs_review: 25\n"
            "related:\n"
            "  default_limit: 3\n"
            "store:\n"
            "  delete_batch_size: 50\n"
        )

        config = load_config(str(config_file))

        assert config.database.path == "custom/progress.db"
        assert config.scoring.half_life_days == 30.0
        assert config.scoring.tier_scores == {"strong": 95.0, "moderate": 55.0, "weak": 15.0}
        assert config.levels.confident == 85.0
        assert config.levels.needs_review == 25.0
        assert config.related.default_limit == 3
        assert config.store.delete_batch_size == 50

    def test_scenario_partial_config_uses_defaults(self, tmp_path, monkeypatch):
        """
        Scenario: An operator only overrides one tier score

        Given: A config.yaml with just scoring.tier_scores.weak
        When: The configuration is loaded
        Then: The other tiers and sections keep their defaults
        """
        monkeypatch.delenv("MASTERYLOG_DB_PATH", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("scoring:\n  tier_scores:\n    Weak: 10\n")

        config = load_config(str(config_file))

        assert config.scoring.tier_scores["weak"] == 10.0
        assert config.scoring.tier_scores["strong"] == TIER_SCORES["strong"]
        assert config.scoring.half_life_days == HALF_LIFE_DAYS
        assert config.database.path == "data/masterylog.db"

    def test_scenario_empty_config_file(self, tmp_path, monkeypatch):
        """
        Scenario: The config file exists but is empty

        Given: An empty config.yaml
        When: The configuration is loaded
        Then: Built-in defaults are used
        """
        monkeypatch.delenv("MASTERYLOG_DB_PATH", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(str(config_file))

        assert config.related.default_limit == 5
        assert config.store.delete_batch_size == 500

    def test_scenario_database_path_from_environment(self, tmp_path, monkeypatch):
        """
        Scenario: The deployment sets the database path in the environment

        Given: MASTERYLOG_DB_PATH set and a different path in config.yaml
        When: The configuration is loaded
        Then: The environment value wins
        """
        monkeypatch.setenv("MASTERYLOG_DB_PATH", "/var/lib/masterylog/events.db")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("database:\n  path: data/local.db\n")

        config = load_config(str(config_file))

        assert config.database.path == "/var/lib/masterylog/events.db"

    def test_scenario_missing_config_file(self, tmp_path):
        """
        Scenario: The config file was not deployed

        Given: A path that does not exist
        When: The configuration is loaded
        Then: FileNotFoundError is raised
        """
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    @pytest.mark.parametrize("half_life", ["0", "-90"])
    def test_scenario_non_positive_half_life(self, tmp_path, monkeypatch, half_life):
        """
        Scenario: An operator sets a half-life that would break recency decay

        Given: A config.yaml with scoring.half_life_days of zero or less
        When: The configuration is loaded
        Then: ValueError is raised before any proficiency is computed
        """
        monkeypatch.delenv("MASTERYLOG_DB_PATH", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"scoring:\n  half_life_days: {half_life}\n")

        with pytest.raises(ValueError, match="half_life_days"):
            load_config(str(config_file))
