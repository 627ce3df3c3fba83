"""
System package.

Exports:
    - LoggerFactory: Factory for creating configured loggers
    - LoggingConfig: Logging configuration model
"""

from tradeperf.system.log_system import LoggerFactory, LoggingConfig

__all__ = [
    "LoggerFactory",
    "LoggingConfig",
]
