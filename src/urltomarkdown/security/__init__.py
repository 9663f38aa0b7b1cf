"""URL validation for urltomarkdown."""

from .url_validator import UrlValidationResult, UrlValidator

__all__ = ["UrlValidator", "UrlValidationResult"]
