"""
Adapters layer - External capabilities (timestamp parsing).
"""

from .timestamp_parser import PendulumTimestampParser, TimestampParser

__all__ = ["PendulumTimestampParser", "TimestampParser"]
