"""Unit tests for configuration loading and validation."""
import pytest
import yaml

from avatar_matching.configs import get_config_value, load_config, validate_config
from avatar_matching.matching import MatchingConfig


def _write_yaml(path, data):
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return str(path)


class TestLoadConfig:
    def test_shipped_config_is_valid(self, config_path):
        config = load_config(str(config_path))
        assert validate_config(config) == []
        assert MatchingConfig.from_config(config) == MatchingConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError):
            load_config(str(path))


class TestValidateConfig:
    def test_missing_sections(self):
        issues = validate_config({})
        assert "Missing required section: global" in issues
        assert "Missing required section: matching" in issues

    def test_weights_must_sum_to_one(self, tmp_path):
        config = load_config(_write_yaml(tmp_path / "c.yaml", {
            "global": {}, "matching": {"primary_weight": 0.7, "secondary_weight": 0.7},
        }))
        assert any("don't sum to 1" in issue for issue in validate_config(config))

    def test_threshold_outside_recommended_range(self):
        issues = validate_config({"global": {}, "matching": {"threshold": 20}})
        assert len(issues) == 1
        assert "recommended range" in issues[0]

    def test_tier_order(self):
        issues = validate_config({
            "global": {}, "matching": {"quality_thresholds": {"excellent": 60, "good": 70}},
        })
        assert any("Quality thresholds" in issue for issue in issues)

    def test_evaluation_pairs(self):
        issues = validate_config({"global": {}, "matching": {}, "evaluation": {"n_pairs": 0}})
        assert issues == ["evaluation.n_pairs must be positive, got 0"]


class TestGetConfigValue:
    def test_nested_value(self):
        config = {"matching": {"quality_thresholds": {"excellent": 90}}}
        assert get_config_value(config, "matching.quality_thresholds.excellent") == 90

    def test_default(self):
        assert get_config_value({"matching": {}}, "matching.threshold", 60) == 60
        assert get_config_value({"matching": 5}, "matching.threshold") is None
