"""Prompt text sent to every backend."""

SYSTEM_INSTRUCTION = """You are an expert etymologist and historical linguist. When given a word, return its geographic and linguistic journey through history as structured JSON.

Guidelines:
- Coordinates must be [longitude, latitude] format (longitude first for GeoJSON compatibility)
- Include 3-8 waypoints for most words, capturing major linguistic transitions.
- For the journey array, order chronologically (order: 1 is first stop after origin).
- Be historically accurate - if uncertain, note approximations.
- routeType should reflect how the word likely traveled TO that location.
- For each location, provide a name and the ISO 3166-1 alpha-2 country code.
- For words with multiple etymology paths (like "tea"), choose the most historically significant route but mention alternatives in the narrative.
- If a word has no clear geographic journey (coined recently, technical term, etc.), return fewer waypoints with the origin and current usage location.

IMPORTANT: Return ONLY valid JSON matching the schema. No markdown, no explanations."""

JSON_SCHEMA = """{
  "word": "string",
  "currentMeaning": "string - brief modern definition",
  "origin": {
    "word": "string - original word form",
    "language": "string - e.g. 'Arabic', 'Latin'",
    "meaning": "string - original meaning",
    "location": {
      "name": "string - city/region name",
      "countryCode": "string - ISO 3166-1 alpha-2",
      "coordinates": [longitude, latitude]
    },
    "century": "string - e.g. '15th Century'"
  },
  "journey": [
    {
      "order": 1,
      "word": "string - word form in this language",
      "language": "string",
      "pronunciation": "string - IPA optional",
      "location": {
        "name": "string",
        "countryCode": "string",
        "coordinates": [longitude, latitude]
      },
      "century": "string",
      "routeType": "land" | "sea",
      "notes": "string - how/why word changed"
    }
  ],
  "narrative": "string - 2-3 paragraphs telling the full story",
  "routeSummary": "string - e.g. 'SILK_ROAD' or 'MARITIME'",
  "funFact": "string - optional interesting tidbit"
}"""

DEFAULT_LANGUAGE = "English"


def build_prompt(word: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Build the user prompt for tracing ``word``.

    Args:
        word: The word to trace
        language: Language for the free-text fields of the answer

    Returns:
        Prompt text embedding the instruction and the JSON schema
    """
    language_instruction = ""
    if language and language != DEFAULT_LANGUAGE:
        language_instruction = (
            f"\n\nIMPORTANT: Write all text content (currentMeaning, narrative, notes, "
            f"funFact, routeSummary) in {language}. Keep only the schema field names in English."
        )

    return f"""Trace the etymological journey of the word: "{word}"

{SYSTEM_INSTRUCTION}{language_instruction}

Respond with JSON matching this schema:
{JSON_SCHEMA}

Return ONLY the JSON object, no other text."""
