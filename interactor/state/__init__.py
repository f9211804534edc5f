# In-memory application state
from .builds import BuildsStore

__all__ = ["BuildsStore"]
