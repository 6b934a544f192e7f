SYSTEM_PROMPT = "You are a helpful food recommendation assistant. Always respond with valid JSON only."

SUGGESTION_PROMPT = """
You are a food recommendation assistant. Today is {day} and it's time for {meal_time}.

Available food options:
{options}

Based on the day ({day}), meal time ({meal_time}), ratings, and descriptions, suggest ONE best meal option.

RETURN JSON FORMAT:
{{
  "selectedMealName": "exact name from list",
  "reason": "why this meal is perfect for today (be specific and appealing)",
  "suggestedPrice": 0,
  "category": "category name"
}}
"""

# Shorter variant for providers billed per input token
SHORT_SUGGESTION_PROMPT = """
Today is {day} and it's {meal_time} time. Suggest the best meal from these options:

{options}

Respond with JSON: {{"selectedMealName": "name", "reason": "why it's perfect for today"}}
"""

# Text-generation models do not follow JSON instructions; ask a plain question
FREE_TEXT_PROMPT = "Suggest a meal for {meal_time} on {day}. Here are options: {names}. Which one is best and why?"


def format_options(candidates, limit: int = 20) -> str:
    lines = []
    for idx, c in enumerate(candidates[:limit], start=1):
        lines.append(
            f"{idx}. {c.name} - {c.category} - ${c.price:.2f} - Rating: {c.rating}/5 - {c.description[:80]}"
        )
    return "\n".join(lines)
