"""
Identity Proctor Service

Verifies from a single webcam image that the expected person is present
and that the capture environment satisfies the proctoring policies.
"""

__version__ = "1.0.0"
