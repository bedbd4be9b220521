"""Monitoring module: exposes health checks and Prometheus metrics endpoint.

Mounted by `ApiModule` under `/monitor`.
"""

from .monitoring_module import MonitoringModule

__all__ = ["MonitoringModule"]
