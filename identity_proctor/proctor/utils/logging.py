"""
Proctoring Logger - Logs verification and enrollment events
"""

import logging
import uuid
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)


def generate_request_id() -> str:
    """Generate unique request ID."""
    return f"req_{uuid.uuid4().hex[:8]}"


def log_proctor_event(
    request_id: str,
    event_type: str,
    details: Optional[Dict[str, Any]] = None,
    level: str = "info"
):
    """
    Log a proctoring event.
    
    Args:
        request_id: Request ID the event belongs to
        event_type: Type of event (verify_start, check_failed, enroll_end, etc.)
        details: Optional event details
        level: Log level (debug, info, warning, error)
    """
    message = f"[PROCTOR] request={request_id} event={event_type}"
    
    if details:
        detail_str = " ".join(f"{k}={v}" for k, v in details.items())
        message += f" {detail_str}"
    
    if level == "debug":
        logger.debug(message)
    elif level == "warning":
        logger.warning(message)
    elif level == "error":
        logger.error(message)
    else:
        logger.info(message)


def log_verify_start(request_id: str, image_size: int):
    """Log verification start event"""
    log_proctor_event(
        request_id=request_id,
        event_type="verify_start",
        details={"image_bytes": image_size}
    )


def log_verify_end(request_id: str, records: List[Any], duration_ms: float):
    """Log verification end event"""
    failed = [r.name for r in records if not r.success]
    log_proctor_event(
        request_id=request_id,
        event_type="verify_end",
        details={
            "records": len(records),
            "failed": ",".join(failed) if failed else "none",
            "duration_ms": round(duration_ms, 1)
        }
    )


def log_check_failed(request_id: str, check: str, error: Exception, timed_out: bool = False):
    """Log a check unit that fell back to its failure records"""
    log_proctor_event(
        request_id=request_id,
        event_type="check_timeout" if timed_out else "check_failed",
        details={
            "check": check,
            "error": type(error).__name__,
            "message": str(error) or "-"
        },
        level="warning"
    )
