"""Data models for the recipe generation layer.

Defines the closed enumerations that drive prompt constraints and the Pydantic
value objects exchanged with callers. All models are frozen: they are built
fresh per request and never mutated afterwards.

Python attributes are snake_case. Field aliases match the keys used in the
Gemini response schema (e.g. ``prepTime``, ``isMissing``), and either spelling
is accepted on input. The snake_case nutrition and serving keys of the response
schema also accept their camelCase forms (``servingsCount``, ``nutritionTotal``).

Strings are kept exactly as given: taste entries go verbatim into the prompt
and recipes are returned as the service produced them.
"""

from enum import Enum
from typing import List, Optional, Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DietaryMode(str, Enum):
    """Nutritional constraint applied uniformly to every generated recipe."""

    STANDARD = "STANDARD"
    HIGH_PROTEIN = "HIGH_PROTEIN"
    KETO = "KETO"
    UNDER_500_CAL = "UNDER_500_CAL"


class EmotionalStyle(str, Enum):
    """Mood-driven stylistic and textural constraint."""

    COMFORT = "COMFORT"
    LIGHT = "LIGHT"
    ENERGIZED = "ENERGIZED"
    COZY = "COZY"
    LAZY = "LAZY"
    IMPRESS = "IMPRESS"


class TasteProfile(BaseModel):
    """Caller-supplied taste memory used to personalize the recipe prompt.

    Entries are rendered verbatim into the prompt, in the order given.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    loved_patterns: Annotated[
        List[str], Field(default_factory=list, alias="lovedPatterns", description="Flavor patterns the user loved")
    ]
    disliked_patterns: Annotated[
        List[str], Field(default_factory=list, alias="dislikedPatterns", description="Patterns the user avoids")
    ]
    spice_level: Annotated[str, Field(alias="spiceLevel", description="Preferred spice level")] = "medium"
    texture_preferences: Annotated[
        List[str], Field(default_factory=list, alias="texturePreferences", description="Preferred textures")
    ]
    flavor_bias: Annotated[
        List[str], Field(default_factory=list, alias="flavorBias", description="Flavors to lean towards")
    ]


class NutritionFacts(BaseModel):
    """Macro breakdown, either for a whole recipe or a single serving."""

    model_config = ConfigDict(frozen=True)

    calories: Annotated[float, Field(description="Energy in kcal")]
    protein_g: Annotated[float, Field(description="Protein in grams")]
    carbs_g: Annotated[float, Field(description="Carbohydrates in grams")]
    fat_g: Annotated[float, Field(description="Fat in grams")]


class RecipeIngredientLine(BaseModel):
    """One ingredient line of a generated recipe."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Annotated[str, Field(min_length=1, description="Ingredient name")]
    amount: Annotated[str, Field(description="Free-text quantity, e.g. '2 cups'")]
    is_missing: Annotated[
        bool, Field(alias="isMissing", description="True if the ingredient is not in the user's on-hand list")
    ]


class RecipeCandidate(BaseModel):
    """A generated recipe with its assigned, response-local identifier.

    The id is ``recipe-<index>`` by position in the response and is not stable
    across calls. Nutrition numbers are trusted from the service as-is.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Annotated[str, Field(description="Synthetic identifier assigned by position (recipe-<index>)")]
    title: Annotated[str, Field(min_length=1, description="Recipe name")]
    description: Annotated[str, Field(description="Short pitch for the dish")]
    prep_time: Annotated[str, Field(alias="prepTime", description="Free-text preparation time")]
    calories: Annotated[float, Field(description="Calories per serving (kcal)")]
    servings_count: Annotated[
        float,
        Field(
            validation_alias=AliasChoices("servings_count", "servingsCount"),
            description="Number of servings the recipe yields",
        ),
    ]
    nutrition_source: Annotated[
        Optional[str],
        Field(
            validation_alias=AliasChoices("nutrition_source", "nutritionSource"),
            description="Where the nutrition data came from (e.g. USDA)",
        ),
    ] = None
    is_estimated: Annotated[
        bool,
        Field(
            validation_alias=AliasChoices("is_estimated", "isEstimated"),
            description="True if portions were estimated to compute nutrition",
        ),
    ] = False
    nutrition_total: Annotated[
        NutritionFacts,
        Field(
            validation_alias=AliasChoices("nutrition_total", "nutritionTotal"),
            description="Nutrition for the whole recipe",
        ),
    ]
    nutrition_per_serving: Annotated[
        NutritionFacts,
        Field(
            validation_alias=AliasChoices("nutrition_per_serving", "nutritionPerServing"),
            description="Nutrition for one serving",
        ),
    ]
    ingredients: Annotated[List[RecipeIngredientLine], Field(description="Ingredient lines in recipe order")]
    instructions: Annotated[List[str], Field(description="Step-by-step instructions")]

    @property
    def missing_ingredients(self) -> List[str]:
        """Names of ingredients the user does not have on hand."""
        return [line.name for line in self.ingredients if line.is_missing]
