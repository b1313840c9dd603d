"""
Booking eligibility and scheduling rules for a single-inventory event venue.
"""

__version__ = "0.1.0"
