from functools import lru_cache

from src.core.workspace import Workspace
from src.config import Config

@lru_cache()
def get_workspace() -> Workspace:
    """Singleton for the process-wide upload root."""
    return Workspace(Config.UPLOAD_DIR)
