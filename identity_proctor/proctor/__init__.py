"""
Identity Proctoring Module

Verifies a single capture by checking:
- Exactly one face, with readable eye/mouth state and head pose
- Exactly one person and no prohibited objects
- No unsafe content
- Identity match against a previously enrolled face

and enrolls new faces for later matching.
"""

from .api import router

__all__ = ["router"]
