"""
Proctor Configuration - immutable view of the settings used by checks and enrollment
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import Settings


def parse_label_list(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma-separated label list.
    
    Whitespace around names is stripped, empty entries are dropped and
    duplicates keep their first position.
    """
    labels = []
    for part in (raw or "").split(","):
        name = part.strip()
        if name and name not in labels:
            labels.append(name)
    return tuple(labels)


@dataclass(frozen=True)
class ProctorConfig:
    """Loaded once and passed explicitly to every check unit and to enrollment"""
    
    collection_id: str
    faces_table: str
    min_confidence: float = 50.0
    objects_of_interest: Tuple[str, ...] = ()
    check_timeout_seconds: float = 10.0
    region: str = "us-east-1"
    provider_endpoint_url: Optional[str] = None
    store_endpoint_url: Optional[str] = None
    aws_max_attempts: int = 3
    aws_connect_timeout: float = 3.0
    aws_read_timeout: float = 10.0
    rollback_on_failure: bool = True
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "ProctorConfig":
        return cls(
            collection_id=settings.COLLECTION_ID,
            faces_table=settings.FACES_TABLENAME,
            min_confidence=settings.MIN_CONFIDENCE,
            objects_of_interest=parse_label_list(settings.OBJECTS_OF_INTEREST_LABELS),
            check_timeout_seconds=settings.CHECK_TIMEOUT_SECONDS,
            region=settings.REGION,
            provider_endpoint_url=settings.PROVIDER_ENDPOINT_URL,
            store_endpoint_url=settings.STORE_ENDPOINT_URL,
            aws_max_attempts=settings.AWS_MAX_ATTEMPTS,
            aws_connect_timeout=settings.AWS_CONNECT_TIMEOUT,
            aws_read_timeout=settings.AWS_READ_TIMEOUT,
            rollback_on_failure=settings.ENROLL_ROLLBACK_ON_FAILURE
        )
