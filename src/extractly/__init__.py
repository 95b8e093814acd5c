"""
Extractly - rule-based article extraction behind a JWT-protected HTTP API.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .container import AppContext
from .service import ExtractionService

__all__ = ["__version__", "Config", "AppContext", "ExtractionService"]
