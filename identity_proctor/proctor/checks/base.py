"""
Check Unit base - failure-isolated wrapper around one or two collaborator calls
"""

import asyncio
import logging
from typing import Any, Callable, List, Tuple

from ..config import ProctorConfig
from ..models import TestRecord, failure_records
from ..utils.logging import log_check_failed

logger = logging.getLogger(__name__)


class CheckUnit:
    """
    One independent check producing a fixed set of test records.
    
    Subclasses declare `record_names` and implement `evaluate()`.
    `run()` never raises: a collaborator error, a malformed response or a
    timeout fills every declared slot with the failure value, so the
    orchestrator always receives exactly `len(record_names)` records in
    the declared order.
    """
    
    name: str = "check"
    record_names: Tuple[str, ...] = ()
    
    def __init__(self, config: ProctorConfig, provider: Any):
        self.config = config
        self.provider = provider
    
    async def evaluate(self, image_bytes: bytes) -> List[TestRecord]:
        raise NotImplementedError
    
    def failure_records(self) -> List[TestRecord]:
        return failure_records(self.record_names)
    
    async def call(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking collaborator call in a worker thread"""
        return await asyncio.to_thread(func, *args)
    
    async def run(self, image_bytes: bytes, request_id: str = "-") -> List[TestRecord]:
        try:
            records = await asyncio.wait_for(
                self.evaluate(image_bytes),
                timeout=self.config.check_timeout_seconds
            )
        except asyncio.TimeoutError as e:
            log_check_failed(request_id, self.name, e, timed_out=True)
            return self.failure_records()
        except Exception as e:
            logger.debug(f"{self.name} failed", exc_info=True)
            log_check_failed(request_id, self.name, e)
            return self.failure_records()
        
        if [r.name for r in records] != list(self.record_names):
            logger.error(f"{self.name} produced unexpected records: {[r.name for r in records]}")
            return self.failure_records()
        
        return records
