"""Language service exports."""

from .service import LanguageService

__all__ = ["LanguageService"]
