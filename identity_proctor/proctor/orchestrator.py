"""
Verification Orchestrator - fans one image out to every check unit

Checks run concurrently and isolate their own failures, so the join
always yields a complete report:

    Objects of Interest, Person Detection      (presence)
    Person Recognition                         (identity match)
    Face Detection ... Eyes Detection          (face quality, 8 records)
    Unsafe Content                             (moderation)
"""

import asyncio
import base64
import binascii
import io
import logging
import time
from typing import Any, List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from .checks import (
    CheckUnit,
    FaceQualityCheck,
    IdentityMatchCheck,
    ModerationCheck,
    PresenceCheck
)
from .config import ProctorConfig
from .exceptions import ImageDecodeError
from .models import TestRecord
from .utils.logging import generate_request_id, log_verify_end, log_verify_start

logger = logging.getLogger(__name__)


def decode_image(image_b64: Optional[str]) -> bytes:
    """
    Decode a base64 image and make sure it is a readable image file.
    
    Raises:
        ImageDecodeError: image missing, not base64, empty or not an image
    """
    if not image_b64:
        raise ImageDecodeError("No image provided")
    
    # Tolerate data URLs from browsers
    if image_b64.startswith("data:") and "," in image_b64:
        image_b64 = image_b64.split(",", 1)[1]
    
    # MIME-style clients wrap base64 at 76 columns
    image_b64 = "".join(image_b64.split())
    
    try:
        image_bytes = base64.b64decode(image_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Image is not valid base64: {e}") from e
    
    if not image_bytes:
        raise ImageDecodeError("Image is empty")
    
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()
    except Image.DecompressionBombError as e:
        # Header parsed fine; size limits are left to the provider
        logger.warning(f"Oversized image passed to checks: {e}")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageDecodeError(f"Invalid image data: {e}") from e
    
    return image_bytes


class VerificationOrchestrator:
    """
    Pure aggregation over the check units, no policy of its own.
    
    Usage:
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        records = await orchestrator.verify(image_bytes)
    """
    
    def __init__(self, checks: Sequence[CheckUnit]):
        self.checks = list(checks)
    
    @classmethod
    def from_config(cls, config: ProctorConfig, provider: Any, store: Any) -> "VerificationOrchestrator":
        return cls([
            PresenceCheck(config, provider),
            IdentityMatchCheck(config, provider, store),
            FaceQualityCheck(config, provider),
            ModerationCheck(config, provider),
        ])
    
    @property
    def record_names(self) -> List[str]:
        return [name for check in self.checks for name in check.record_names]
    
    async def verify(self, image_bytes: bytes, request_id: Optional[str] = None) -> List[TestRecord]:
        """
        Run every check on the image and flatten the results in check order.
        
        Raises:
            ImageDecodeError: no image bytes were given
        """
        if not image_bytes:
            raise ImageDecodeError("No image provided")
        
        request_id = request_id or generate_request_id()
        start = time.perf_counter()
        log_verify_start(request_id, len(image_bytes))
        
        results = await asyncio.gather(
            *(check.run(image_bytes, request_id) for check in self.checks)
        )
        records = [record for check_records in results for record in check_records]
        
        log_verify_end(request_id, records, (time.perf_counter() - start) * 1000)
        return records
