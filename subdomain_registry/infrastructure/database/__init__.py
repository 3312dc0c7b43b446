from .base import Base
from .session import create_engine_from_url, create_session_factory, init_models
from .models import SubdomainModel

__all__ = [
    "Base",
    "create_engine_from_url",
    "create_session_factory",
    "init_models",
    "SubdomainModel",
]
