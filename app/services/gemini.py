"""Gemini-backed Transcription and Extraction services."""

import base64
import json
import mimetypes
from typing import Any, Optional

from langchain_core.messages import BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from app.services.prompts import ANALYSIS_PROMPT, ANALYSIS_SCHEMA, TRANSCRIPTION_PROMPT
from app.utils.logging_config import logger

# Extensions the platform's mimetypes table usually lacks or maps to video/*.
AUDIO_MIME_TYPES = {
    ".m4a": "audio/mp4",
    ".opus": "audio/ogg",
    ".ogg": "audio/ogg",
    ".aac": "audio/aac",
    ".amr": "audio/amr",
    ".3gp": "audio/3gpp",
}


class ExtractionError(RuntimeError):
    """Raised when the model output is not a single JSON object."""


def guess_audio_mime_type(file_name: str, default: str) -> str:
    extension = "." + file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    if extension in AUDIO_MIME_TYPES:
        return AUDIO_MIME_TYPES[extension]
    guessed, _ = mimetypes.guess_type(file_name)
    if guessed and guessed.startswith("audio/"):
        return guessed
    return default


def message_text(message: BaseMessage) -> str:
    """Flattens an AI message whose content may be a list of parts."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiTranscriber:
    """Turns raw call audio into a speaker-labelled plain-text transcript."""

    def __init__(
        self,
        api_key: str,
        model: str,
        default_mime_type: str,
        llm: Optional[ChatGoogleGenerativeAI] = None,
    ):
        self._default_mime_type = default_mime_type
        self._llm = llm or ChatGoogleGenerativeAI(
            model=model,
            temperature=0,
            google_api_key=api_key,
        )

    async def transcribe(self, audio: bytes, file_name: str) -> str:
        mime_type = guess_audio_mime_type(file_name, self._default_mime_type)
        message = HumanMessage(
            content=[
                {"type": "text", "text": TRANSCRIPTION_PROMPT},
                {
                    "type": "media",
                    "mime_type": mime_type,
                    "data": base64.b64encode(audio).decode("ascii"),
                },
            ]
        )
        logger.info(f"Transcribing {file_name} ({len(audio)} bytes, {mime_type})")
        response = await self._llm.ainvoke([message])
        transcript = message_text(response).strip()
        if not transcript:
            # Blank calls are kept; only an empty combined transcript fails the ticket.
            logger.warning(f"Empty transcription returned for {file_name}")
        return transcript


class GeminiExtractor:
    """Extracts the restaurant-incident fields from a combined transcript."""

    def __init__(
        self,
        api_key: str,
        model: str,
        llm: Optional[ChatGoogleGenerativeAI] = None,
    ):
        self._llm = llm or ChatGoogleGenerativeAI(
            model=model,
            temperature=0,
            google_api_key=api_key,
            response_mime_type="application/json",
            response_schema=ANALYSIS_SCHEMA,
        )

    async def extract(self, transcript: str) -> dict[str, Any]:
        prompt = ANALYSIS_PROMPT.format(transcript=transcript)
        response = await self._llm.ainvoke([HumanMessage(content=prompt)])
        raw = message_text(response)
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Model returned invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise ExtractionError(
                f"Model returned {type(payload).__name__} instead of a JSON object"
            )
        return payload
