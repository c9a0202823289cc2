from .logger import configure_logging
from .settings import SolverSettings, load_settings

__all__ = ["configure_logging", "SolverSettings", "load_settings"]
