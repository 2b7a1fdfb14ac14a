"""
Image analysis service
Describes an uploaded image with the vision-capable deployment
"""
import base64
import logging

from openai_client import get_client
from config import VISION_MODEL_NAME, MAX_COMPLETION_TOKENS
from prompts import IMAGE_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)


def analyze_image(data: bytes, content_type: str) -> str:
    """
    Return a detailed description of the image
    Raises ValueError for empty or non-image uploads
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValueError(f"Unsupported content type for image analysis: {content_type or 'unknown'}")
    if not data:
        raise ValueError("Uploaded image is empty")

    encoded = base64.b64encode(data).decode("ascii")
    logger.info(f"Analyzing {content_type} image ({len(data)} bytes)")

    response = get_client().chat.completions.create(
        model=VISION_MODEL_NAME,
        messages=[{
            "role": "user",
            "content": [
                {"type": "text", "text": IMAGE_ANALYSIS_PROMPT},
                {"type": "image_url", "image_url": {"url": f"data:{content_type};base64,{encoded}"}},
            ],
        }],
        max_completion_tokens=MAX_COMPLETION_TOKENS
    )

    if not response.choices or not response.choices[0].message.content:
        raise ValueError("Empty response from OpenAI")

    description = response.choices[0].message.content.strip()
    logger.info(f"Image description (first 200 chars): {description[:200]}")
    return description
