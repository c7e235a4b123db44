# chronolens/generation/llm_builder.py
import logging
from config.config import settings
from chronolens.generation.llms.gemini import build_gemini_llm

logger = logging.getLogger(__name__)

def get_llm():
    """
    Factory: read the configuration and return the matching LLM.
    Only Gemini is supported for now.
    """
    provider = (settings.LLM_PROVIDER or "").lower()

    if provider == 'gemini' or not provider:
        logger.info("LLM Factory: Selecting Gemini.")
        return build_gemini_llm()

    logger.warning(f"LLM Provider '{provider}' is not supported. Falling back to Gemini.")
    return build_gemini_llm()
