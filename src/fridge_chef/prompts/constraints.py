"""Constraint compiler: dietary mode, mood and taste memory to prompt text.

Pure functions, no I/O. Each closed enumeration maps to exactly one fixed
sentence. Adding a DietaryMode or EmotionalStyle member requires adding an
entry to the matching table below; tests/unit/test_constraints.py walks every
member to catch a missing one.
"""

from typing import Optional

from fridge_chef.models.models import DietaryMode, EmotionalStyle, TasteProfile


BALANCED_CONSTRAINT = "Provide balanced and delicious recipes."

DIETARY_CONSTRAINTS: dict[DietaryMode, str] = {
    DietaryMode.STANDARD: BALANCED_CONSTRAINT,
    DietaryMode.HIGH_PROTEIN: (
        "CRITICAL: Every recipe must be high in protein (focus on meat, eggs, beans, or dairy provided)."
    ),
    DietaryMode.KETO: (
        "CRITICAL: Every recipe must be Ketogenic (high fat, low carb). Avoid sugars and high-starch items."
    ),
    DietaryMode.UNDER_500_CAL: "CRITICAL: Every recipe must be under 500 calories per serving.",
}

STYLE_CONSTRAINTS: dict[EmotionalStyle, str] = {
    EmotionalStyle.COMFORT: (
        "STYLE: Soul-warming, familiar, and hearty. Focus on textures that feel like a hug."
    ),
    EmotionalStyle.LIGHT: (
        "STYLE: Crisp, vibrant, and clean. Focus on fresh flavors, citrus, and raw or lightly cooked elements."
    ),
    EmotionalStyle.ENERGIZED: (
        "STYLE: Power-packed and balanced. Focus on high-nutrient density to provide lasting energy."
    ),
    EmotionalStyle.COZY: (
        "STYLE: Slow-cooked vibes, warm spices (cinnamon, cumin, etc.), and soothing warmth."
    ),
    EmotionalStyle.LAZY: (
        "STYLE: Minimum effort, maximum flavor. One-pot or 5-minute prep style. Very few steps."
    ),
    EmotionalStyle.IMPRESS: (
        "STYLE: Sophisticated and gourmet. Focus on elegant presentation and unique flavor pairings "
        "to wow a guest."
    ),
}


def compile_dietary_constraint(mode: DietaryMode | str) -> str:
    """Return the nutritional instruction for a dietary mode.

    Args:
        mode: DietaryMode member or its string value.

    Returns:
        The mode's fixed sentence. Unknown values fall back to the neutral
        "balanced" instruction.
    """
    return DIETARY_CONSTRAINTS.get(mode, BALANCED_CONSTRAINT)


def compile_style_constraint(style: EmotionalStyle | str) -> str:
    """Return the stylistic instruction for a mood.

    Args:
        style: EmotionalStyle member or its string value.

    Returns:
        The style's fixed sentence, or "" for an unknown value (the style
        constraint is dropped rather than raising).
    """
    return STYLE_CONSTRAINTS.get(style, "")


def compile_personalization_block(profile: Optional[TasteProfile] = None) -> str:
    """Render a taste profile as a labelled prompt block.

    Args:
        profile: Caller's taste memory, or None.

    Returns:
        "" when no profile is given. Otherwise the loved and avoided patterns,
        spice level, textures and flavor bias (verbatim, in caller order),
        followed by an instruction to reflect loved patterns in the creative
        "Chef's Choice" recipe.
    """
    if profile is None:
        return ""

    return f"""
USER PERSONAL PALATE (Taste Memory):
- Loved flavor patterns: {', '.join(profile.loved_patterns)}
- Avoided patterns: {', '.join(profile.disliked_patterns)}
- Preferred Spice: {profile.spice_level}
- Preferred Textures: {', '.join(profile.texture_preferences)}
- Flavor bias: {', '.join(profile.flavor_bias)}

ADJUSTMENT: Prioritize these preferences in the 3 generated options. If the user loves a specific style, reflect that in the "Chef's Choice" option.
"""
