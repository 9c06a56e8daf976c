"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from spotifart.api import app

    uvicorn spotifart.api:app --reload
"""

from spotifart.api.app import app

__all__ = ["app"]
