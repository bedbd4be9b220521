from .logger import LoggerModule
from .diagnostics import DiagnosticsModule
from .api import ApiModule

__all__ = ["LoggerModule", "DiagnosticsModule", "ApiModule"]
