"""
Configuration module for the DocuCraft API
"""
import os
import logging

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Azure OpenAI Configuration
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT", "")
AZURE_OPENAI_API_KEY = os.getenv("AZURE_OPENAI_API_KEY", "")
API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2024-08-01-preview")
MODEL_NAME = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-5-mini")
VISION_MODEL_NAME = os.getenv("AZURE_OPENAI_VISION_DEPLOYMENT", MODEL_NAME)
MAX_COMPLETION_TOKENS = int(os.getenv("MAX_COMPLETION_TOKENS", "8000"))

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Auto researcher (Google Custom Search JSON API)
GOOGLE_SEARCH_API_KEY = os.getenv("GOOGLE_SEARCH_API_KEY", "")
GOOGLE_SEARCH_ENGINE_ID = os.getenv("GOOGLE_SEARCH_ENGINE_ID", "")
GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
RESEARCH_RESULT_LIMIT = int(os.getenv("RESEARCH_RESULT_LIMIT", "3"))
RESEARCH_QUERY_SUFFIX = " academic paper filetype:pdf"
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "20"))
SOURCE_CHAR_LIMIT = int(os.getenv("SOURCE_CHAR_LIMIT", "12000"))

# Uploads
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

# Export
EXPORT_FONT_NAME = os.getenv("EXPORT_FONT_NAME", "Lora")
PDF_MARGIN_POINTS = 35
PDF_BODY_FONT = "Helvetica"
PDF_HEADING_FONT = "Times-Bold"
PDF_CODE_FONT = "Courier"
