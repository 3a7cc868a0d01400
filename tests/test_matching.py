"""Unit tests for normalization, attribute comparison and score composition."""
import math

import pytest

from avatar_matching.catalog import ALL_ATTRIBUTES, DEFAULT_AVATAR_CONFIG, PRIMARY_ATTRIBUTES, AvatarAttribute
from avatar_matching.matching import (
    MatchingConfig,
    MatchQuality,
    QualityThresholds,
    StoredAvatar,
    aggregate_group,
    classify_quality,
    compare_attribute,
    compare_avatars,
    extract_config,
    normalize,
    quick_match,
    resolve_config,
    round_score,
)


# ══════════════════════════════════════════════════════════════════════
# Normalization
# ══════════════════════════════════════════════════════════════════════

class TestNormalize:
    def test_none_gives_defaults(self):
        assert normalize(None) == DEFAULT_AVATAR_CONFIG
        assert normalize() == DEFAULT_AVATAR_CONFIG

    def test_partial_keeps_supplied_values(self):
        result = normalize({"hairColor": "black"})
        assert result["hairColor"] == "black"
        assert result["skinTone"] == DEFAULT_AVATAR_CONFIG["skinTone"]
        assert set(result) == set(ALL_ATTRIBUTES)

    def test_unvalidated_values_pass_through(self):
        assert normalize({"hairColor": "teal"})["hairColor"] == "teal"

    def test_missing_markers_take_default(self):
        result = normalize({"hairColor": None, "eyeColor": float("nan")})
        assert result["hairColor"] == "brown"
        assert result["eyeColor"] == "brown"

    def test_unknown_keys_dropped(self):
        assert "tattoos" not in normalize({"tattoos": "sleeve"})

    def test_enum_keys(self):
        assert normalize({AvatarAttribute.EYE_COLOR: "green"})["eyeColor"] == "green"

    def test_stored_avatar_unwrapped(self):
        stored = StoredAvatar.create({"hairColor": "red"})
        assert normalize(stored)["hairColor"] == "red"
        assert normalize(stored.to_dict())["hairColor"] == "red"

    def test_unsupported_type_gives_defaults(self):
        assert normalize(42) == DEFAULT_AVATAR_CONFIG

    def test_input_not_mutated(self):
        partial = {"hairColor": "black"}
        normalize(partial)
        assert partial == {"hairColor": "black"}

    def test_idempotent(self):
        once = normalize({"hairColor": "black", "glasses": "round"})
        assert normalize(once) == once

    def test_extract_config_none(self):
        assert extract_config(None) == {}


# ══════════════════════════════════════════════════════════════════════
# Stored avatars
# ══════════════════════════════════════════════════════════════════════

class TestStoredAvatar:
    def test_create_assigns_id_and_timestamps(self):
        stored = StoredAvatar.create({"hairColor": "red"})
        assert stored.id
        assert stored.version == 1
        assert stored.created_at == stored.updated_at

    def test_explicit_id(self):
        assert StoredAvatar.create({}, avatar_id="abc").id == "abc"

    def test_dict_round_trip(self):
        stored = StoredAvatar.create({"hairColor": "red"}, avatar_id="abc")
        assert StoredAvatar.from_dict(stored.to_dict()) == stored

    def test_rejects_non_dict_config(self):
        with pytest.raises(ValueError):
            StoredAvatar(id="x", config="hairColor=red")


# ══════════════════════════════════════════════════════════════════════
# Attribute comparison
# ══════════════════════════════════════════════════════════════════════

class TestCompareAttribute:
    def test_exact_match(self):
        assert compare_attribute("hairColor", "black", "black") == 1.0

    def test_exact_match_ignores_case(self):
        assert compare_attribute("hairColor", "Black", "black") == 1.0

    def test_related_values(self):
        assert compare_attribute("hairColor", "black", "darkBrown") == 0.7

    def test_fuzzy_disabled(self):
        assert compare_attribute("hairColor", "black", "darkBrown", use_fuzzy=False) == 0.0

    def test_unrelated_values(self):
        assert compare_attribute("hairColor", "black", "blonde") == 0.0

    def test_attribute_without_table(self):
        assert compare_attribute("topColor", "navy", "blue") == 0.0


class TestAggregateGroup:
    def test_empty_attribute_set(self, default_avatar):
        result = aggregate_group(default_avatar, default_avatar, [])
        assert result.score == 0
        assert result.matching == []

    def test_buckets_keep_attribute_order(self, default_avatar):
        candidate = dict(default_avatar, hairColor="lightBrown", eyeColor="blue")
        result = aggregate_group(default_avatar, candidate, PRIMARY_ATTRIBUTES)
        assert result.partial == ["hairColor"]
        assert result.non_matching == ["eyeColor"]
        assert result.matching == [a for a in PRIMARY_ATTRIBUTES if a not in ("hairColor", "eyeColor")]
        assert result.score == pytest.approx((7 + 0.7) / 9 * 100)


# ══════════════════════════════════════════════════════════════════════
# Known scenarios
# ══════════════════════════════════════════════════════════════════════

class TestCompareAvatars:
    def test_identical_descriptors(self, default_avatar):
        result = compare_avatars(default_avatar, default_avatar)
        assert result.score == 100
        assert result.quality == MatchQuality.EXCELLENT
        assert result.is_match
        assert result.breakdown.primary_score == 100
        assert result.breakdown.secondary_score == 100
        assert len(result.breakdown.matching_attributes) == 19
        assert result.breakdown.partial_match_attributes == ()
        assert result.breakdown.non_matching_attributes == ()

    def test_one_secondary_difference(self, default_avatar):
        result = compare_avatars(default_avatar, dict(default_avatar, topColor="red"))
        assert result.breakdown.primary_score == 100
        assert result.breakdown.secondary_score == 90
        assert result.score == 96
        assert result.quality == MatchQuality.EXCELLENT
        assert result.breakdown.non_matching_attributes == ("topColor",)

    def test_related_primary_difference(self, default_avatar):
        target = dict(default_avatar, hairColor="black")
        candidate = dict(default_avatar, hairColor="darkBrown")
        result = compare_avatars(target, candidate)
        assert result.breakdown.primary_score == 97
        assert result.score == 98
        assert result.breakdown.partial_match_attributes == ("hairColor",)

    def test_threshold_boundary(self, default_avatar, secondary_opposite):
        result = compare_avatars(default_avatar, secondary_opposite)
        assert result.score == 60
        assert result.quality == MatchQuality.FAIR
        assert result.is_match
        assert not compare_avatars(default_avatar, secondary_opposite, threshold=61).is_match

    def test_nothing_in_common(self, default_avatar, opposite_avatar):
        result = compare_avatars(default_avatar, opposite_avatar)
        assert result.score == 0
        assert result.quality == MatchQuality.POOR
        assert not result.is_match
        assert len(result.breakdown.non_matching_attributes) == 19

    def test_missing_descriptors_compare_as_default(self):
        assert compare_avatars(None, {}).score == 100

    def test_fair_score_passes_or_fails_by_threshold(self, default_avatar, opposite_avatar):
        # 8 of 9 primary and 3 of 10 secondary: 0.6 * 88.9 + 0.4 * 30 = 65.3
        candidate = dict(opposite_avatar, **{a: default_avatar[a] for a in PRIMARY_ATTRIBUTES[:8]})
        candidate.update(eyebrowStyle="natural", noseShape="straight", mouthExpression="neutral")
        result = compare_avatars(default_avatar, candidate)
        assert result.score == 65
        assert result.quality == MatchQuality.FAIR
        assert result.is_match
        assert not compare_avatars(default_avatar, candidate, threshold=70).is_match

    def test_result_serializes(self, default_avatar):
        data = compare_avatars(default_avatar, default_avatar).to_dict()
        assert data["quality"] == "excellent"
        assert data["breakdown"]["primary_score"] == 100

    def test_fuzzy_matching_can_be_disabled(self, default_avatar):
        target = dict(default_avatar, hairColor="black")
        candidate = dict(default_avatar, hairColor="darkBrown")
        result = compare_avatars(target, candidate, config={"use_fuzzy_matching": False})
        assert result.breakdown.partial_match_attributes == ()
        assert result.breakdown.non_matching_attributes == ("hairColor",)

    def test_custom_weights(self, default_avatar):
        candidate = dict(default_avatar, topColor="red")
        config = MatchingConfig(primary_weight=1.0, secondary_weight=0.0)
        assert compare_avatars(default_avatar, candidate, config=config).score == 100


# ══════════════════════════════════════════════════════════════════════
# Classification and rounding
# ══════════════════════════════════════════════════════════════════════

class TestClassifyQuality:
    @pytest.mark.parametrize("score, quality", [
        (100, MatchQuality.EXCELLENT),
        (85, MatchQuality.EXCELLENT),
        (84, MatchQuality.GOOD),
        (70, MatchQuality.GOOD),
        (69, MatchQuality.FAIR),
        (50, MatchQuality.FAIR),
        (49, MatchQuality.POOR),
        (0, MatchQuality.POOR),
    ])
    def test_default_tiers(self, score, quality):
        assert classify_quality(score) == quality

    def test_custom_tiers(self):
        tiers = QualityThresholds(excellent=95, good=80, fair=60)
        assert classify_quality(90, tiers) == MatchQuality.GOOD

    def test_invalid_tier_order(self):
        with pytest.raises(ValueError):
            QualityThresholds(excellent=60, good=70, fair=50).validate()


class TestRoundScore:
    def test_half_rounds_up(self):
        assert round_score(96.5) == 97
        assert round_score(2.5) == 3

    def test_regular_rounding(self):
        assert round_score(96.49) == 96
        assert round_score(58.0) == 58


# ══════════════════════════════════════════════════════════════════════
# Matching config
# ══════════════════════════════════════════════════════════════════════

class TestMatchingConfig:
    def test_defaults(self):
        config = MatchingConfig()
        assert config.primary_weight == 0.6
        assert config.secondary_weight == 0.4
        assert config.threshold == 60

    def test_invalid_weight(self):
        with pytest.raises(ValueError):
            MatchingConfig(primary_weight=1.5).validate()

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            MatchingConfig(threshold=120).validate()

    def test_from_config(self):
        config = MatchingConfig.from_config({
            "matching": {"primary_weight": 0.7, "secondary_weight": 0.3,
                         "quality_thresholds": {"excellent": 90}}
        })
        assert config.primary_weight == 0.7
        assert config.quality_thresholds.excellent == 90
        assert config.quality_thresholds.good == 70

    def test_from_dict_restores_thresholds(self):
        original = MatchingConfig(threshold=45, quality_thresholds=QualityThresholds(90, 75, 55))
        assert MatchingConfig.from_dict(original.to_dict()) == original

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "matching.json"
        MatchingConfig(threshold=40).save(str(path))
        assert MatchingConfig.load(str(path)).threshold == 40

    def test_resolve_overrides(self):
        config = resolve_config({"threshold": 75, "quality_thresholds": {"fair": 40}})
        assert config.threshold == 75
        assert config.primary_weight == 0.6
        assert config.quality_thresholds.fair == 40
        assert config.quality_thresholds.excellent == 85

    def test_resolve_none(self):
        assert resolve_config(None) == MatchingConfig()


# ══════════════════════════════════════════════════════════════════════
# Quick match
# ══════════════════════════════════════════════════════════════════════

class TestQuickMatch:
    def test_identical(self, default_avatar):
        assert quick_match(default_avatar, default_avatar)

    def test_nothing_in_common(self, default_avatar, opposite_avatar):
        assert not quick_match(default_avatar, opposite_avatar)

    def test_boundary(self, default_avatar, secondary_opposite):
        assert quick_match(default_avatar, secondary_opposite, threshold=60)
        assert not quick_match(default_avatar, secondary_opposite, threshold=61)

    @pytest.mark.parametrize("weights", [(0.6, 0.4), (0.5, 0.5), (0.8, 0.2), (0.3, 0.7)])
    @pytest.mark.parametrize("threshold", [30, 50, 60, 75, 90])
    def test_agrees_with_full_comparison(self, generated_pairs, weights, threshold):
        config = MatchingConfig(primary_weight=weights[0], secondary_weight=weights[1])
        for target, candidate in generated_pairs:
            expected = compare_avatars(target, candidate, threshold, config).is_match
            assert quick_match(target, candidate, threshold, config) == expected


# ══════════════════════════════════════════════════════════════════════
# Properties over generated pairs
# ══════════════════════════════════════════════════════════════════════

class TestProperties:
    def test_deterministic(self, generated_pairs):
        for target, candidate in generated_pairs:
            assert compare_avatars(target, candidate) == compare_avatars(target, candidate)

    def test_self_match(self, generated_pairs):
        for target, _ in generated_pairs:
            result = compare_avatars(target, target)
            assert result.score == 100
            assert result.quality == MatchQuality.EXCELLENT

    def test_symmetric_score(self, generated_pairs):
        for target, candidate in generated_pairs:
            assert compare_avatars(target, candidate).score == compare_avatars(candidate, target).score

    def test_bounds(self, generated_pairs):
        for target, candidate in generated_pairs:
            score = compare_avatars(target, candidate).score
            assert isinstance(score, int)
            assert 0 <= score <= 100

    def test_threshold_monotonicity(self, generated_pairs):
        for target, candidate in generated_pairs:
            if compare_avatars(target, candidate, threshold=80).is_match:
                assert compare_avatars(target, candidate, threshold=40).is_match

    def test_nan_is_treated_as_missing(self, default_avatar):
        partial = dict(default_avatar, hairColor=math.nan)
        assert compare_avatars(partial, default_avatar).score == 100

    def test_null_candidate_against_any_target(self, opposite_avatar):
        result = compare_avatars(opposite_avatar, None)
        assert result.score == 0
        assert not result.is_match
