"""Unit tests for the constraint compiler."""

import pytest

from fridge_chef.models.models import DietaryMode, EmotionalStyle, TasteProfile
from fridge_chef.prompts.constraints import (
    BALANCED_CONSTRAINT,
    DIETARY_CONSTRAINTS,
    STYLE_CONSTRAINTS,
    compile_dietary_constraint,
    compile_personalization_block,
    compile_style_constraint,
)


class TestCompileDietaryConstraint:
    """Test dietary mode to constraint mapping."""

    def test_every_mode_has_an_entry(self):
        """Adding a DietaryMode without a table entry must fail here."""
        assert set(DIETARY_CONSTRAINTS) == set(DietaryMode)

    @pytest.mark.parametrize("mode", list(DietaryMode))
    def test_every_mode_is_non_empty(self, mode):
        """Each mode compiles to a non-empty sentence."""
        assert compile_dietary_constraint(mode).strip()

    def test_modes_are_distinct(self):
        """No two modes share a sentence."""
        sentences = [compile_dietary_constraint(mode) for mode in DietaryMode]
        assert len(set(sentences)) == len(sentences)

    def test_standard_is_balanced(self):
        """STANDARD maps to the neutral balanced instruction."""
        assert compile_dietary_constraint(DietaryMode.STANDARD) == BALANCED_CONSTRAINT

    def test_keto_constraint(self):
        """KETO asks for high fat, low carb."""
        assert "Ketogenic" in compile_dietary_constraint(DietaryMode.KETO)

    def test_under_500_constraint(self):
        """UNDER_500_CAL caps calories per serving."""
        assert "under 500 calories" in compile_dietary_constraint(DietaryMode.UNDER_500_CAL)

    def test_string_value_accepted(self):
        """The enum's raw string value resolves to the same sentence."""
        assert compile_dietary_constraint("HIGH_PROTEIN") == compile_dietary_constraint(DietaryMode.HIGH_PROTEIN)

    @pytest.mark.parametrize("mode", ["PALEO", "", "keto", None])
    def test_unknown_mode_falls_back_to_balanced(self, mode):
        """Unrecognized modes produce the balanced instruction."""
        assert compile_dietary_constraint(mode) == BALANCED_CONSTRAINT


class TestCompileStyleConstraint:
    """Test emotional style to constraint mapping."""

    def test_every_style_has_an_entry(self):
        """Adding an EmotionalStyle without a table entry must fail here."""
        assert set(STYLE_CONSTRAINTS) == set(EmotionalStyle)

    @pytest.mark.parametrize("style", list(EmotionalStyle))
    def test_every_style_is_non_empty(self, style):
        """Each style compiles to a non-empty sentence."""
        assert compile_style_constraint(style).startswith("STYLE:")

    def test_styles_are_distinct(self):
        """No two styles share a sentence."""
        sentences = [compile_style_constraint(style) for style in EmotionalStyle]
        assert len(set(sentences)) == len(sentences)

    def test_lazy_style(self):
        """LAZY asks for minimal effort."""
        assert "One-pot" in compile_style_constraint(EmotionalStyle.LAZY)

    def test_string_value_accepted(self):
        """The enum's raw string value resolves to the same sentence."""
        assert compile_style_constraint("COZY") == compile_style_constraint(EmotionalStyle.COZY)

    @pytest.mark.parametrize("style", ["ANGRY", "", None])
    def test_unknown_style_is_dropped(self, style):
        """Unrecognized styles produce an empty string, not an error."""
        assert compile_style_constraint(style) == ""


class TestCompilePersonalizationBlock:
    """Test taste profile rendering."""

    def test_no_profile(self):
        """No profile means no personalization block."""
        assert compile_personalization_block(None) == ""
        assert compile_personalization_block() == ""

    def test_contains_every_pattern_verbatim(self, taste_profile):
        """Every loved and disliked pattern appears verbatim."""
        block = compile_personalization_block(taste_profile)
        for pattern in taste_profile.loved_patterns + taste_profile.disliked_patterns:
            assert pattern in block

    def test_contains_preferences(self, taste_profile):
        """Spice level, textures and flavor bias are rendered."""
        block = compile_personalization_block(taste_profile)
        assert "Preferred Spice: hot" in block
        assert "Preferred Textures: crispy, creamy" in block
        assert "Flavor bias: umami, citrus" in block

    def test_preserves_caller_order(self, taste_profile):
        """Patterns are listed in the order supplied."""
        block = compile_personalization_block(taste_profile)
        assert "Loved flavor patterns: smoky chipotle, lemon-garlic" in block
        assert "Avoided patterns: overly sweet sauces, mushy textures" in block

    def test_biases_chefs_choice(self, taste_profile):
        """The block steers the creative candidate toward loved patterns."""
        block = compile_personalization_block(taste_profile)
        assert "USER PERSONAL PALATE" in block
        assert "Chef's Choice" in block

    def test_empty_profile_still_renders_block(self):
        """A profile with empty lists still produces the labelled block."""
        block = compile_personalization_block(TasteProfile())
        assert "USER PERSONAL PALATE" in block
        assert "Preferred Spice: medium" in block

    def test_padded_patterns_kept_verbatim(self):
        """Surrounding whitespace in caller entries is not stripped."""
        profile = TasteProfile(loved_patterns=["  smoky "], disliked_patterns=[" bitter\t"])
        block = compile_personalization_block(profile)
        assert "  smoky " in block
        assert " bitter\t" in block
