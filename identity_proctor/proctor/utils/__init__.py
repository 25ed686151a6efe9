"""Proctoring utilities"""

from .logging import log_proctor_event, generate_request_id

__all__ = ["log_proctor_event", "generate_request_id"]
