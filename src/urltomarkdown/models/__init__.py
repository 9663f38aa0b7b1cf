"""Urltomarkdown configuration, options and result models."""

from .config import NetworkConfig, ServiceConfig, ValidationConfig
from .options import ConversionOptions
from .outcome import (
    FAILURE_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    ExtractionError,
    FetchFailureKind,
    FetchOutcome,
    Outcome,
)

__all__ = [
    # Config
    "NetworkConfig",
    "ServiceConfig",
    "ValidationConfig",
    # Options
    "ConversionOptions",
    # Outcomes
    "FAILURE_MESSAGE",
    "PARSE_FAILURE_MESSAGE",
    "ExtractionError",
    "FetchFailureKind",
    "FetchOutcome",
    "Outcome",
]
