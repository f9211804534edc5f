# Build server services - request queue integration
from .client import BuildServerClient
from .schemas import QueueRequest, RequestKind

__all__ = ["BuildServerClient", "QueueRequest", "RequestKind"]
