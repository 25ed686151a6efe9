"""
Face-Quality Check - face count, eye/mouth state, head pose and landmarks

Uses the provider's face detection with the full attribute set.
"""

import logging
from typing import Any, List

from ..models import TestRecord
from .base import CheckUnit

logger = logging.getLogger(__name__)


def display_value(value: Any) -> str:
    """Booleans read Yes/No, everything else is shown as-is"""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


class FaceQualityCheck(CheckUnit):
    """
    Produces 8 records in fixed order.
    
    Face Detection passes only when exactly one face was found. The other
    seven read an attribute of the *first* detected face and pass when the
    attribute is truthy. This is a readability check, not a judgement:
    "Eyes Open Detection" succeeding means the eyes-open value was present
    and truthy, and a legitimate False or 0.0 value fails the same way a
    missing one does.
    
    With zero faces the attribute lookup fails and all 8 records take the
    failure value.
    """
    
    name = "face_quality"
    record_names = (
        "Face Detection",
        "Eyes Open Detection",
        "Mouth Open Detection",
        "Pitch Detection",
        "Roll Detection",
        "Yaw Detection",
        "Emotion Detection",
        "Eyes Detection",
    )
    
    async def evaluate(self, image_bytes: bytes) -> List[TestRecord]:
        response = await self.call(self.provider.detect_faces, image_bytes)
        
        faces = response["FaceDetails"]
        n_faces = len(faces)
        face = faces[0]
        
        attributes = [
            face["EyesOpen"]["Value"],
            face["MouthOpen"]["Value"],
            face["Pose"]["Pitch"],
            face["Pose"]["Roll"],
            face["Pose"]["Yaw"],
            face["Emotions"][0]["Type"],
            face["Landmarks"][0]["Y"],
        ]
        
        records = [
            TestRecord(name=self.record_names[0], success=n_faces == 1, details=str(n_faces))
        ]
        for name, value in zip(self.record_names[1:], attributes):
            records.append(
                TestRecord(name=name, success=bool(value), details=display_value(value))
            )
        
        logger.debug(f"Face quality: faces={n_faces} eyes_open={attributes[0]} mouth_open={attributes[1]}")
        return records
