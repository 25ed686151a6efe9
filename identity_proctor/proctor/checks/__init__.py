"""Check units for verification"""

from .base import CheckUnit
from .face_quality import FaceQualityCheck
from .presence import PresenceCheck
from .moderation import ModerationCheck
from .identity_match import IdentityMatchCheck

__all__ = [
    "CheckUnit",
    "FaceQualityCheck",
    "PresenceCheck",
    "ModerationCheck",
    "IdentityMatchCheck"
]
