"""Utility helpers: logging setup and token extraction."""

from .logging_config import get_logger, setup_logging
from .token_extractor import extract_tokens_from_ability

__all__ = ["get_logger", "setup_logging", "extract_tokens_from_ability"]
