"""
Utility modules: logging, configuration and parse diagnostics.
"""

from .config import Config
from .diagnostics import ParseDiagnostics
from .logging import PerformanceLogger, setup_logging

__all__ = ['Config', 'ParseDiagnostics', 'PerformanceLogger', 'setup_logging']
