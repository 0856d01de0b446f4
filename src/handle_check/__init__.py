"""
handle-check: X/Twitter handle validation and availability checking.

Validates a candidate handle against the platform's format rules, offers
corrective suggestions, and checks whether a well-formed handle is taken.
"""

__version__ = "0.1.0"
