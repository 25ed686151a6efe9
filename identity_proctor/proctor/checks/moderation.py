"""
Content-Moderation Check - unsafe content in the capture
"""

from typing import List

from ..models import NOTHING_FOUND, TestRecord
from .base import CheckUnit
from .presence import join_label_names


class ModerationCheck(CheckUnit):
    """Passes when the provider returns no moderation labels"""
    
    name = "moderation"
    record_names = ("Unsafe Content",)
    
    async def evaluate(self, image_bytes: bytes) -> List[TestRecord]:
        response = await self.call(
            self.provider.detect_moderation_labels,
            image_bytes,
            self.config.min_confidence
        )
        names = [label["Name"] for label in response["ModerationLabels"]]
        
        return [
            TestRecord(
                name=self.record_names[0],
                success=not names,
                details=join_label_names(names) if names else NOTHING_FOUND
            )
        ]
