"""
Presence/Object Check - prohibited objects and number of persons

Uses the provider's label detection with the configured minimum confidence.
"""

import logging
from typing import Iterable, List

from ..models import NOTHING_FOUND, TestRecord
from .base import CheckUnit

logger = logging.getLogger(__name__)

PERSON_LABEL = "Person"


def join_label_names(names: Iterable[str]) -> str:
    """Deduplicated, lexicographically sorted, comma-joined"""
    return ", ".join(sorted(set(names)))


class PresenceCheck(CheckUnit):
    """
    Objects of Interest fails when any deny-listed label is present.
    Person Detection passes when the Person label has exactly one instance.
    """
    
    name = "presence"
    record_names = ("Objects of Interest", "Person Detection")
    
    async def evaluate(self, image_bytes: bytes) -> List[TestRecord]:
        response = await self.call(
            self.provider.detect_labels,
            image_bytes,
            self.config.min_confidence
        )
        labels = response["Labels"]
        
        deny_list = set(self.config.objects_of_interest)
        offending = [label["Name"] for label in labels if label["Name"] in deny_list]
        
        objects_record = TestRecord(
            name=self.record_names[0],
            success=not offending,
            details=join_label_names(offending) if offending else NOTHING_FOUND
        )
        
        person = next((label for label in labels if label["Name"] == PERSON_LABEL), None)
        n_people = len(person.get("Instances", [])) if person else 0
        person_record = TestRecord(
            name=self.record_names[1],
            success=n_people == 1,
            details=str(n_people)
        )
        
        if offending:
            logger.info(f"Objects of interest detected: {objects_record.details}")
        
        return [objects_record, person_record]
