"""Exception hierarchy for cave generation and configuration.

ConfigurationMissing / ConfigurationInvalid come from the configuration layer,
before any grid exists. CatalogEmpty, PlacementExhausted and GenerationFailed
come from the generator; a GenerationFailed means no grid was produced.
"""

from __future__ import annotations

from typing import Optional


class CaveError(Exception):
    """Base class for every error raised by cavecrawl."""


class ConfigurationMissing(CaveError):
    def __init__(self, source: str, message: Optional[str] = None):
        super().__init__(message or f"no generation parameters found in {source}")
        self.source = source


class ConfigurationInvalid(CaveError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code


class CatalogEmpty(CaveError):
    def __init__(self, catalog: str):
        super().__init__(f"{catalog} catalog has no entries")
        self.catalog = catalog


class PlacementExhausted(CaveError):
    def __init__(self, stage: str, attempts: int, message: Optional[str] = None):
        super().__init__(message or f"{stage} placement found no candidate after {attempts} attempt(s)")
        self.stage = stage
        self.attempts = attempts


class GenerationFailed(CaveError):
    def __init__(self, attempts: int, reason: str):
        super().__init__(f"cave generation failed after {attempts} attempt(s): {reason}")
        self.attempts = attempts
        self.reason = reason


__all__ = [
    "CaveError",
    "ConfigurationMissing",
    "ConfigurationInvalid",
    "CatalogEmpty",
    "PlacementExhausted",
    "GenerationFailed",
]
