"""Turning free text and attachments into a raw genogram document via Gemini."""

import base64
import json
import logging
import mimetypes
from pathlib import Path
import re

import requests

from genogram.config import AppConfig
from genogram.errors import GenerationError

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

PROMPT_TEMPLATE = """You are an expert at analysing family structures.
Analyse all of the input below (text, audio, images, PDFs) and extract the
information needed to draw a genogram (family diagram) as JSON.

Output format:
{{
  "members": [
    {{
      "id": "unique id (e.g. self, father, mother, spouse, son1, daughter1)",
      "name": "name",
      "gender": "M (male) / F (female)",
      "birthYear": 1960,
      "isDeceased": false,
      "isSelf": true,
      "isKeyPerson": false,
      "generation": 0,
      "note": "remarks"
    }}
  ],
  "marriages": [
    {{
      "husband": "husband id",
      "wife": "wife id",
      "status": "married / divorced / separated / cohabitation",
      "children": ["child id 1", "child id 2"]
    }}
  ]
}}

Generation rules:
- The person receiving care is generation 0
- Their parents are -1, grandparents -2
- Their children are 1, grandchildren 2

Rules:
- Mark the person receiving care with isSelf: true
- Mark deceased people with isDeceased: true
- Express marriages and divorces in "marriages"
- List children in the "children" of their parents' marriage
- If the parents of anyone are known, always add the parents as a marriage
  (even if one of them has died) and include the child, otherwise no
  descent line can be drawn.
- If a spouse is implied but unnamed, create a spouse member (e.g. "wife")
  and a marriage for them.
- Fill in gaps with reasonable assumptions so the diagram is complete.

Input:
{text}

Output JSON only, without explanation."""


def extract_json(text: str) -> dict:
    """
    Pull the JSON document out of a model reply.

    Prefers a fenced ```json block, then the outermost {...} span, then the
    whole reply.

    Raises:
        GenerationError: if no JSON object can be decoded
    """
    text = (text or "").strip()
    match = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
    if match:
        candidate = match.group(1).strip()
    else:
        match = re.search(r"(\{[\s\S]*\})", text)
        candidate = match.group(1).strip() if match else text

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Model reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GenerationError(f"Model reply is not a JSON object: {type(data).__name__}")
    return data


def file_part(path: Path) -> dict:
    path = Path(path)
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return {
        "inline_data": {
            "mime_type": mime_type,
            "data": base64.b64encode(path.read_bytes()).decode("ascii"),
        }
    }


class GeminiGenerator:
    """Client for the Gemini generateContent endpoint."""

    def __init__(self, config: AppConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    def build_payload(self, text: str, files=()) -> dict:
        parts = [{"text": PROMPT_TEMPLATE.format(text=text)}]
        for path in files:
            parts.append(file_part(path))
        return {"contents": [{"role": "user", "parts": parts}]}

    def generate(self, text: str = "", files=()) -> dict:
        """
        Ask the model for a {members, marriages} document.

        Raises:
            GenerationError: on missing input or API key, HTTP failure or an
                unusable reply
        """
        files = [Path(f) for f in files]
        if not text and not files:
            raise GenerationError("Text or at least one file is required")
        if not self.config.gemini_api_key:
            raise GenerationError("GEMINI_API_KEY is not configured")

        payload = self.build_payload(text, files)
        url = GEMINI_URL.format(model=self.config.gemini_model)
        logger.info("Requesting genogram from %s (%d file(s))", self.config.gemini_model, len(files))

        try:
            response = self.session.post(
                url,
                params={"key": self.config.gemini_api_key},
                json=payload,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Gemini returned a non-JSON response: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError(f"Unexpected Gemini response shape: {data!r}") from e

        reply = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        return extract_json(reply)
