"""
Identity-Match Check - recognizes the person against enrolled faces

Two steps:
1. search the face collection for the best match (at most one candidate)
2. look the candidate's identity token up in the identity store

Collaborator failures are swallowed: unlike the other checks, the record
keeps its default {false, "0"} value and never reports "Server error".
"""

import asyncio
import logging
from typing import Any, List

from botocore.exceptions import ClientError

from ..config import ProctorConfig
from ..models import MatchOutcome, MatchStatus, TestRecord
from ..utils.logging import log_proctor_event
from .base import CheckUnit

logger = logging.getLogger(__name__)

# Rekognition's answer when the submitted image contains no face
NO_FACE_ERROR_CODES = {"InvalidParameterException"}


class IdentityMatchCheck(CheckUnit):
    """Produces a single "Person Recognition" record"""
    
    name = "identity_match"
    record_names = ("Person Recognition",)
    
    def __init__(self, config: ProctorConfig, provider: Any, store: Any):
        super().__init__(config, provider)
        self.store = store
    
    async def match(self, image_bytes: bytes) -> MatchOutcome:
        response = await self.call(
            self.provider.search_faces_by_image,
            image_bytes,
            self.config.collection_id,
            self.config.min_confidence,
            1
        )
        matches = response.get("FaceMatches") or []
        if not matches:
            return MatchOutcome.no_match("no face in the collection matched")
        
        token = matches[0]["Face"]["ExternalImageId"]
        profile = await self.call(self.store.get_profile, token)
        if profile is None:
            # Indexed face without a profile, left behind by a failed enrollment
            return MatchOutcome.no_match(f"orphaned face token={token}")
        
        return MatchOutcome.matched(profile.full_name)
    
    async def resolve(self, image_bytes: bytes) -> MatchOutcome:
        """Run both steps and classify any failure instead of raising"""
        try:
            return await asyncio.wait_for(
                self.match(image_bytes),
                timeout=self.config.check_timeout_seconds
            )
        except asyncio.TimeoutError:
            return MatchOutcome.collaborator_error("timed out")
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in NO_FACE_ERROR_CODES:
                return MatchOutcome.no_match(f"{code}: no face in image")
            return MatchOutcome.collaborator_error(f"{code}: {e}")
        except Exception as e:
            return MatchOutcome.collaborator_error(f"{type(e).__name__}: {e}")
    
    async def run(self, image_bytes: bytes, request_id: str = "-") -> List[TestRecord]:
        outcome = await self.resolve(image_bytes)
        
        log_proctor_event(
            request_id=request_id,
            event_type="match_outcome",
            details={"status": outcome.status.value, "reason": outcome.reason or "-"},
            level="error" if outcome.status is MatchStatus.COLLABORATOR_ERROR else "info"
        )
        
        return [outcome.to_record(self.record_names[0])]
