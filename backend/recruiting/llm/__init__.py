"""
Chat model construction for the generative backend.
"""
from langchain_openai import ChatOpenAI
from recruiting.core.config import TalentSearchConfig


def build_chat_model(config: TalentSearchConfig) -> ChatOpenAI:
    """Build the chat model used for player analyses."""
    return ChatOpenAI(
        model=config.analysis_model,
        api_key=config.openai_api_key,
        temperature=config.analysis_temperature,
        timeout=config.request_timeout,
        max_retries=config.max_retries,
    )


__all__ = ['build_chat_model']
