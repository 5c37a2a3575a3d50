"""
Service layer helpers that wire adapters and domain logic together.
"""

from .business_time_factory import BusinessTimeFactory

__all__ = ["BusinessTimeFactory"]
