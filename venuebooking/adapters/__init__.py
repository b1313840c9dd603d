"""
Adapters layer - Storage backends for existing bookings.
"""

from .memory_store import InMemoryBookingStore

__all__ = ["InMemoryBookingStore"]
