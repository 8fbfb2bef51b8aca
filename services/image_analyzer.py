# services/image_analyzer.py
"""
Site photo classification through a vision model.

The OpenAI client is built once by the application and passed in; nothing
here keeps a process-wide client. Every failure (network, API, malformed
reply) surfaces as a single ImageAnalysisError.
"""

import json
import os
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from constants import (
    DEFAULT_ANALYSIS_MODEL,
    DEFAULT_IMAGE_MIME_TYPE,
    OPENAI_API_KEY_ENV,
    MSG_ANALYSIS_FAILED
)
from core.exceptions import ImageAnalysisError
from core.models import PointCategory
from utils.error_handler import handle_errors
from utils.logger import get_logger
from utils.validators import normalize_category

logger = get_logger(__name__)

_DATA_URL_RE = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)

ANALYSIS_PROMPT = (
    "Actúa como un ingeniero experto en topografía y catastro. "
    "Analiza esta imagen de un punto de levantamiento en campo.\n"
    "Genera un JSON con los siguientes campos:\n"
    '- suggestedName: Un nombre corto y técnico (ej. "Agrietamiento Pavimento", "Muro Colapsado").\n'
    "- detectedType: Clasifica EXACTAMENTE en una de estas categorías: {categories}.\n"
    "- characteristics: Describe técnicamente lo que ves (materiales, dimensiones, "
    "profundidad estimada). Máximo 15 palabras.\n"
    "- observations: Observaciones relevantes para gestión de riesgos o catastro. "
    "Máximo 15 palabras."
)

RESPONSE_FIELDS = ("suggestedName", "detectedType", "characteristics", "observations")


@dataclass(frozen=True)
class ImageAnalysis:
    suggested_name: str
    category: PointCategory
    characteristics: str
    observations: str


def parse_data_url(value: str) -> Tuple[str, str]:
    """
    Split a data URL into (mime_type, base64_data).

    Values that are not ``data:<mime>;base64,<data>`` are treated as raw
    base64: the part after the first comma if there is one, otherwise the
    whole value, with the default JPEG MIME type.
    """
    match = _DATA_URL_RE.match(value)
    if match:
        return match.group(1), match.group(2)

    _, sep, tail = value.partition(",")
    return DEFAULT_IMAGE_MIME_TYPE, tail if sep and tail else value


def build_prompt() -> str:
    categories = ", ".join(f'"{label}"' for label in PointCategory.labels())
    return ANALYSIS_PROMPT.format(categories=categories)


def parse_analysis(text: str) -> ImageAnalysis:
    """
    Parse the model's JSON reply.

    Raises:
        ImageAnalysisError: If the reply is not a JSON object with the expected fields
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details=f"JSON inválido: {e}") from e

    if not isinstance(data, dict):
        raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details="La respuesta no es un objeto JSON")

    missing = [field for field in RESPONSE_FIELDS if field not in data]
    if missing:
        raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details=f"Faltan campos: {', '.join(missing)}")

    category = normalize_category(data["detectedType"])
    if category.value != data["detectedType"]:
        logger.info(f"Unrecognized category {data['detectedType']!r}, using {category.value}")

    return ImageAnalysis(
        suggested_name=str(data["suggestedName"]),
        category=category,
        characteristics=str(data["characteristics"]),
        observations=str(data["observations"]),
    )


class ImageAnalyzer:
    """
    Suggests name, category and notes for a site photo.

    Args:
        client: An ``openai.OpenAI`` instance (or anything exposing
            ``chat.completions.create``)
        model: Vision-capable chat model
    """

    def __init__(self, client: Any, model: str = DEFAULT_ANALYSIS_MODEL):
        self.client = client
        self.model = model

    @classmethod
    def from_api_key(cls, api_key: str = None, model: str = DEFAULT_ANALYSIS_MODEL) -> "ImageAnalyzer":
        """Build the OpenAI client once, reading the key from the environment if not given."""
        api_key = api_key or os.getenv(OPENAI_API_KEY_ENV)
        if not api_key:
            raise ImageAnalysisError(
                "El análisis de imágenes no está configurado",
                details=f"Falta la variable de entorno {OPENAI_API_KEY_ENV}"
            )

        from openai import OpenAI
        return cls(OpenAI(api_key=api_key), model=model)

    def _request(self, mime_type: str, image_data: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": build_prompt()},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{image_data}"}
                        }
                    ]
                }
            ],
            response_format={"type": "json_object"},
            temperature=0,
        )
        return response.choices[0].message.content

    def analyze(self, data_url: str) -> ImageAnalysis:
        """
        Classify a site photo.

        Args:
            data_url: Image as ``data:<mime>;base64,<data>`` (raw base64 also accepted)

        Returns:
            ImageAnalysis; unknown categories are mapped to "Other"

        Raises:
            ImageAnalysisError: On any request or parsing failure
        """
        if not data_url:
            raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details="No hay imagen para analizar")

        mime_type, image_data = parse_data_url(data_url)

        try:
            text = self._request(mime_type, image_data)
        except Exception as e:
            logger.error(f"Image analysis request failed: {type(e).__name__}: {e}")
            raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details=str(e)) from e

        if not text:
            raise ImageAnalysisError(MSG_ANALYSIS_FAILED, details="Respuesta vacía")

        analysis = parse_analysis(text)
        logger.info(f"Image analyzed: '{analysis.suggested_name}' [{analysis.category.value}]")
        return analysis

    @handle_errors(
        error_type=ImageAnalysisError,
        user_message=MSG_ANALYSIS_FAILED,
        log_level="WARNING"
    )
    def suggest(self, data_url: str) -> Optional[ImageAnalysis]:
        """Like analyze, but a failure is logged and yields None so the form is filled by hand."""
        return self.analyze(data_url)
