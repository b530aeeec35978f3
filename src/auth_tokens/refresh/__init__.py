from .orchestrator import TokenOrchestrator
from .expiry import is_token_expired, is_jwt_expired
from .single_flight import SingleFlight

__all__ = [
    "TokenOrchestrator",
    "is_token_expired",
    "is_jwt_expired",
    "SingleFlight",
]
