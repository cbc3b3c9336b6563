"""
banktime - timestamps with US banking-calendar semantics.
"""

from .domain import BusinessTime, ParseError

__version__ = "0.1.0"

__all__ = ["BusinessTime", "ParseError", "__version__"]
