import re
import json
import logging
from json import JSONDecodeError
from typing import Any, List, Optional
from openai import AsyncOpenAI

from chefgenie.domain.Plan import WeeklyPlan
from chefgenie.domain.Recipe import MealType, Protein, Recipe, generate_id
from chefgenie.utilities import config
from chefgenie.utilities.constants import (
    ANY,
    DIFFICULTY_PROMPTS,
    IMAGE_PROMPT_TEMPLATE,
    PLAN_PROMPT_TEMPLATE,
    RECIPE_JSON_FORMAT,
    RECIPE_PROMPT_TEMPLATE,
)

logger = logging.getLogger(__name__)


class RecipeOracle:
    """OpenAI-backed recipe, plan and image generation.

    Every call degrades to an empty/None result: a missing key, a transport
    error or unparsable output never raises past this class.
    """

    def __init__(self, api_key: Optional[str] = None, text_model: Optional[str] = None,
                 image_model: Optional[str] = None):
        self.api_key = config.OPENAI_API_KEY if api_key is None else api_key
        self.text_model = text_model or config.OPENAI_TEXT_MODEL
        self.image_model = image_model or config.OPENAI_IMAGE_MODEL
        self._client: Optional[AsyncOpenAI] = None

    # === Helper: Get OpenAI Client ===
    def _get_openai_client(self) -> Optional[AsyncOpenAI]:
        """Return an OpenAI client if an API key is configured, otherwise None."""
        if not self.api_key:
            return None
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def _generate_json(self, prompt: str) -> Any:
        client = self._get_openai_client()
        if client is None:
            logger.warning("OPENAI_API_KEY not set; skipping recipe generation.")
            return None
        response = await client.responses.create(
            model=self.text_model,
            input=prompt,
            temperature=config.OPENAI_TEMPERATURE,
        )
        return parse_json_output(response.output_text or "")

    # === Recipe Generation ===
    async def fetch_recipes(self, meal_type: MealType, proteins: List[str], max_time: int,
                            supermarket: str, difficulty: str, count: int = 6) -> List[Recipe]:
        """Ask the model for ``count`` recipes. May return fewer; returns [] on failure."""
        try:
            prompt = build_recipe_prompt(meal_type, proteins, max_time, supermarket, difficulty, count)
            data = await self._generate_json(prompt)
            if data is None:
                return []
            if isinstance(data, dict):
                data = data.get("recipes", [])
            if not isinstance(data, list):
                logger.warning("AI returned %s instead of a recipe list", type(data).__name__)
                return []
            recipes = [_recipe_from_ai(item) for item in data if isinstance(item, dict)]
            return [r for r in recipes if r is not None]
        except Exception:
            logger.exception("Error fetching recipes from OpenAI")
            return []

    async def fetch_weekly_plan(self, proteins: List[str], max_time: int, difficulty: str,
                                supermarket: str) -> Optional[WeeklyPlan]:
        """Ask the model for a Monday-Sunday lunch/dinner plan; None on failure."""
        try:
            prompt = build_plan_prompt(proteins, max_time, difficulty, supermarket)
            data = await self._generate_json(prompt)
            if not isinstance(data, dict):
                if data is not None:
                    logger.warning("AI returned %s instead of a weekly plan", type(data).__name__)
                return None
            # Fresh ids, malformed slots emptied; every slot gets its own meal type whatever the model said
            for day in data.values():
                if not isinstance(day, dict):
                    continue
                for slot in ("lunch", "dinner"):
                    if isinstance(day.get(slot), dict):
                        day[slot] = _clean_recipe(day[slot])
            plan = WeeklyPlan.from_dict(data, assign_meal_types=True)
            if not plan.recipes():
                logger.warning("AI weekly plan contained no recipes")
                return None
            return plan
        except Exception:
            logger.exception("Error generating weekly plan")
            return None

    # === Image Generation ===
    async def generate_image(self, title: str) -> Optional[str]:
        """Return a data URL with a photo of the dish, or None."""
        client = self._get_openai_client()
        if client is None:
            logger.warning("OPENAI_API_KEY not set; cannot generate image for %r.", title)
            return None
        try:
            result = await client.images.generate(
                model=self.image_model,
                prompt=IMAGE_PROMPT_TEMPLATE.format(title=title),
                n=1,
            )
        except Exception:
            logger.exception("Error generating image for %r", title)
            return None
        for image in result.data or []:
            if getattr(image, "b64_json", None):
                return f"data:image/png;base64,{image.b64_json}"
            if getattr(image, "url", None):
                return image.url
        logger.warning("Image response for %r contained no image", title)
        return None


# === Prompt Builders ===
def _protein_prompt(proteins: List[str]) -> str:
    if not proteins or Protein.ANY.value in proteins:
        return "various proteins"
    return " or ".join(proteins)


def _difficulty_prompt(difficulty: str) -> str:
    return DIFFICULTY_PROMPTS.get(difficulty, "1-5")


def build_recipe_prompt(meal_type: MealType, proteins: List[str], max_time: int,
                        supermarket: str, difficulty: str, count: int) -> str:
    if supermarket == ANY:
        store_prompt = "Ingredients from Aldi, Coles, or Woolworths (choose lowest price)."
    else:
        store_prompt = f"Ingredients from {supermarket} with estimated price."
    lifestyle = "Work-friendly lunches." if MealType(meal_type) == MealType.LUNCH else "Easy dinners."
    return RECIPE_PROMPT_TEMPLATE.format(
        count=count,
        meal_type=MealType(meal_type).value,
        proteins=_protein_prompt(proteins),
        max_time=max_time,
        store_prompt=store_prompt,
        lifestyle=lifestyle,
        difficulty=_difficulty_prompt(difficulty),
    ) + RECIPE_JSON_FORMAT


def build_plan_prompt(proteins: List[str], max_time: int, difficulty: str, supermarket: str) -> str:
    if supermarket == ANY:
        store_prompt = "Ingredients from Aldi, Coles, or Woolworths."
    else:
        store_prompt = f"Ingredients from {supermarket}."
    return PLAN_PROMPT_TEMPLATE.format(
        store_prompt=store_prompt,
        max_time=max_time,
        difficulty=difficulty,
        proteins=", ".join(proteins) if proteins else ANY,
    ) + RECIPE_JSON_FORMAT


_HOURS = re.compile(r"(\d+)\s*h")
_MINUTES = re.compile(r"(\d+)\s*m")
_NUMBER = re.compile(r"\d+")
_DIFFICULTY_LEVELS = {"easy": 1, "medium": 3, "hard": 4}


def _minutes(value) -> Optional[int]:
    """Prep time from model output: 25, "25", "90 mins", "1 hour 30 mins". None if unreadable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return max(0, int(value))
    text = str(value or "").lower()
    hours, mins = _HOURS.search(text), _MINUTES.search(text)
    if hours or mins:
        return (int(hours.group(1)) * 60 if hours else 0) + (int(mins.group(1)) if mins else 0)
    number = _NUMBER.search(text)
    return int(number.group(0)) if number else None


def _difficulty(value) -> Optional[int]:
    """Difficulty 1-5 from a number, a numeric string or an Easy/Medium/Hard label."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        level = int(value)
    else:
        text = str(value or "").strip().lower()
        number = _NUMBER.search(text)
        level = _DIFFICULTY_LEVELS.get(text, int(number.group(0)) if number else None)
        if level is None:
            return None
    return min(5, max(1, level))


def _clean_recipe(item: dict) -> Optional[dict]:
    """Recipe dict with a fresh id and checked ranges, or None when time or difficulty is unreadable."""
    prep = _minutes(item.get("prepTimeMinutes"))
    difficulty = _difficulty(item.get("difficulty"))
    if prep is None or difficulty is None:
        logger.warning("Dropping malformed recipe %r from AI output", item.get("title"))
        return None
    return dict(item, id=generate_id(), prepTimeMinutes=prep, difficulty=difficulty)


def _recipe_from_ai(item: dict) -> Optional[Recipe]:
    cleaned = _clean_recipe(item)
    if cleaned is None:
        return None
    recipe = Recipe.from_dict(cleaned)
    # The model is loose with capitalisation; anything but "Dinner" is lunch
    recipe.meal_type = MealType.DINNER if item.get("mealType") == MealType.DINNER.value else MealType.LUNCH
    return recipe


# === JSON Parsing ===
def parse_json_output(text: str) -> Any:
    """Parse model output as JSON, repairing fences and trailing commas. None if hopeless."""
    text = (text or "").strip()
    if not text:
        logger.warning("AI returned empty output")
        return None
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass
    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    try:
        return json.loads(cleaned)
    except JSONDecodeError:
        pass
    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.exception("Failed to decode extracted JSON from AI output")
            return None
    logger.error("AI output is not valid JSON and no JSON substring found")
    return None


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None
