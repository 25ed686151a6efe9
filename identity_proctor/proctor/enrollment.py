"""
Enrollment Unit - registers a face and its profile

Steps run in order:
1. generate a fresh identity token
2. index the face in the provider collection under that token
3. persist {collectionId, identityToken, fullName} to the identity store

A failed index never persists a profile. A failed persist after a
successful index would leave an orphaned face, so the indexed face is
deleted again when rollback is enabled.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, List, Optional

from .config import ProctorConfig
from .exceptions import EnrollmentError
from .models import IdentityProfile
from .utils.logging import generate_request_id, log_proctor_event

logger = logging.getLogger(__name__)


def new_identity_token() -> str:
    return str(uuid.uuid4())


class EnrollmentService:
    """Enrolls a person from one face image"""
    
    def __init__(
        self,
        config: ProctorConfig,
        provider: Any,
        store: Any,
        token_factory: Callable[[], str] = new_identity_token
    ):
        self.config = config
        self.provider = provider
        self.store = store
        self.token_factory = token_factory
    
    async def enroll(self, image_bytes: bytes, full_name: str, request_id: Optional[str] = None) -> str:
        """
        Enroll a face.
        
        Args:
            image_bytes: Raw image containing the face
            full_name: Display name stored in the profile
            
        Returns:
            The new identity token
            
        Raises:
            EnrollmentError: indexing or persistence failed
        """
        request_id = request_id or generate_request_id()
        token = self.token_factory()
        log_proctor_event(request_id, "enroll_start", {"token": token, "image_bytes": len(image_bytes)})
        
        try:
            face_ids = await asyncio.to_thread(
                self.provider.index_face,
                image_bytes,
                self.config.collection_id,
                token
            )
        except Exception as e:
            log_proctor_event(request_id, "enroll_failed", {"stage": "index", "error": str(e)}, level="error")
            raise EnrollmentError(f"Face indexing failed: {e}", stage="index", cause=e) from e
        
        if not face_ids:
            log_proctor_event(request_id, "enroll_failed", {"stage": "index", "error": "no face indexed"}, level="error")
            raise EnrollmentError("Face indexing failed: no face found in image", stage="index")
        
        profile = IdentityProfile(
            identity_token=token,
            collection_id=self.config.collection_id,
            full_name=full_name
        )
        
        try:
            await asyncio.to_thread(self.store.put_profile, profile)
        except Exception as e:
            log_proctor_event(request_id, "enroll_failed", {"stage": "persist", "error": str(e)}, level="error")
            orphaned = not await self._rollback(request_id, face_ids)
            raise EnrollmentError(
                f"Profile persistence failed: {e}",
                stage="persist",
                orphaned=orphaned,
                cause=e
            ) from e
        
        log_proctor_event(request_id, "enroll_end", {"token": token, "faces": len(face_ids)})
        return token
    
    async def _rollback(self, request_id: str, face_ids: List[str]) -> bool:
        """Delete the indexed faces, returns True when nothing is left behind"""
        if not self.config.rollback_on_failure:
            log_proctor_event(request_id, "orphan_left", {"face_ids": ",".join(face_ids)}, level="warning")
            return False
        
        try:
            await asyncio.to_thread(
                self.provider.delete_faces,
                self.config.collection_id,
                face_ids
            )
        except Exception as e:
            log_proctor_event(
                request_id,
                "orphan_left",
                {"face_ids": ",".join(face_ids), "error": str(e)},
                level="error"
            )
            return False
        
        log_proctor_event(request_id, "orphan_rollback", {"face_ids": ",".join(face_ids)}, level="warning")
        return True
