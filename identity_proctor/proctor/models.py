"""
Proctoring data model - Test records, identity profiles and match outcomes
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

# Details marker for a check whose collaborator call failed
SERVER_ERROR = "Server error"

# Details marker for "nothing found"
NOTHING_FOUND = "0"


class TestRecord(BaseModel):
    """
    Atomic unit of verification output.
    
    Serialized with the wire names existing clients consume:
    TestName / Success / Details.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    
    # Not a pytest test class
    __test__ = False
    
    name: str = Field(..., alias="TestName")
    success: bool = Field(..., alias="Success")
    details: str = Field(..., alias="Details")
    
    @classmethod
    def failed(cls, name: str, details: str = SERVER_ERROR) -> "TestRecord":
        return cls(name=name, success=False, details=details)


def failure_records(names: Sequence[str], details: str = SERVER_ERROR) -> List[TestRecord]:
    """Fill every declared slot with the same failure value"""
    return [TestRecord.failed(name, details) for name in names]


@dataclass(frozen=True)
class IdentityProfile:
    """Persisted enrollment record, immutable once written"""
    identity_token: str
    collection_id: str
    full_name: str


class MatchStatus(str, Enum):
    """Outcome of an identity search"""
    MATCHED = "matched"
    NO_MATCH = "no_match"
    COLLABORATOR_ERROR = "collaborator_error"


@dataclass(frozen=True)
class MatchOutcome:
    """
    Tri-state result of the identity-match check.
    
    Only MATCHED reaches callers as a success. NO_MATCH and
    COLLABORATOR_ERROR both render as the default {false, "0"} record;
    the distinction is kept for logging.
    """
    status: MatchStatus
    full_name: Optional[str] = None
    reason: str = ""
    
    @classmethod
    def matched(cls, full_name: str) -> "MatchOutcome":
        return cls(status=MatchStatus.MATCHED, full_name=full_name)
    
    @classmethod
    def no_match(cls, reason: str = "") -> "MatchOutcome":
        return cls(status=MatchStatus.NO_MATCH, reason=reason)
    
    @classmethod
    def collaborator_error(cls, reason: str = "") -> "MatchOutcome":
        return cls(status=MatchStatus.COLLABORATOR_ERROR, reason=reason)
    
    def to_record(self, name: str) -> TestRecord:
        if self.status is MatchStatus.MATCHED:
            return TestRecord(name=name, success=True, details=self.full_name)
        return TestRecord(name=name, success=False, details=NOTHING_FOUND)
