"""
API Module — HTTP слой диагностики.
"""

from .module import ApiModule

__all__ = ["ApiModule"]
