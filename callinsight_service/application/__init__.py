from .auth_gate import AuthGate
from .ingestion_service import IngestionService

__all__ = ["AuthGate", "IngestionService"]
