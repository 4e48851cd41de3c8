from typing import Final

DAYS_OF_WEEK: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
ANY: Final[str] = "Any"
SUPERMARKETS: Final[tuple[str, ...]] = ("Any", "Aldi", "Coles", "Woolworths")
DIFFICULTY_LABELS: Final[tuple[str, ...]] = ("Any", "Easy", "Medium", "Hard")
STORE_ORDER: Final[tuple[str, ...]] = ("Aldi", "Woolworths", "Coles")
OTHER_STORE: Final[str] = "Other"

# Units stripped from the front of an ingredient phrase before matching
QUANTITY_UNITS: Final[tuple[str, ...]] = (
    "g", "kg", "ml", "l", "oz", "lb", "cups?", "tsp", "tbsp", "pinch", "bunch",
    "pieces?", "slices?", "cans?", "tins?", "bottles?", "packets?", "jars?",
    "cloves?", "heads?", "stalks?", "fillets?",
)

DIFFICULTY_PROMPTS: Final[dict[str, str]] = {
    "Easy": "1 or 2 (Easy)",
    "Medium": "3 (Medium)",
    "Hard": "4 or 5 (Hard)",
}

RECIPE_PROMPT_TEMPLATE: Final[str] = (
    """
    Generate {count} distinct {meal_type} recipes with {proteins}, max {max_time} mins.

    CONTEXT: Melbourne, Australia.
    {store_prompt}
    {lifestyle}

    Difficulty: {difficulty}.
    Instructions: Concise steps.
    Return ONLY a JSON array in the following format:
    """
)
PLAN_PROMPT_TEMPLATE: Final[str] = (
    """
    Create a weekly meal plan (Mon-Sun), 1 Lunch + 1 Dinner per day.

    Context: Melbourne, Australia.
    {store_prompt}
    Prices in AUD.

    Constraints:
    - Max time: {max_time} mins.
    - Difficulty: {difficulty}.
    - Proteins: {proteins}.

    Lunch: Portable. Dinner: Main.
    Instructions: Concise steps.
    Return ONLY a JSON object keyed by weekday (Monday..Sunday), each value
    {{"lunch": <recipe>, "dinner": <recipe>}}, where a recipe has the format:
    """
)
RECIPE_JSON_FORMAT: Final[str] = (
    """
{
    "title": str,
    "description": str,
    "mealType": "Lunch" | "Dinner",
    "protein": str,
    "prepTimeMinutes": int,
    "difficulty": int (1-5),
    "ingredients": [
      {
        "item": str,
        "store": str (supermarket name),
        "price": str (estimated price in AUD, e.g. "$2.50")
      },
    ],
    "instructions": [
      str,
      str,
    ]
  }
    """
)
IMAGE_PROMPT_TEMPLATE: Final[str] = "Delicious food photo of {title}, professional, 4k."
