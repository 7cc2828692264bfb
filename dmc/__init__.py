"""
dmc: Daily Message Creator

Turns your recent git commits into a status report, standup transcript or
work summary using the Gemini API. Run it from inside any git repository.
"""

__version__ = "0.1.0"

from dmc.core.exceptions import DMCError

__all__ = ["DMCError", "__version__"]
