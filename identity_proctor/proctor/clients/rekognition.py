"""
Detection Provider Client - thin wrapper around AWS Rekognition

Every method is a single blocking request/response call. Check units
run them off the event loop with asyncio.to_thread.
"""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config

from ..config import ProctorConfig

logger = logging.getLogger(__name__)


def build_botocore_config(config: ProctorConfig) -> Config:
    """Bounded retries and socket timeouts shared by every AWS client"""
    return Config(
        region_name=config.region,
        retries={"max_attempts": config.aws_max_attempts, "mode": "standard"},
        connect_timeout=config.aws_connect_timeout,
        read_timeout=config.aws_read_timeout
    )


class RekognitionProvider:
    """
    Face, label, moderation and face-search capabilities.
    
    Usage:
        provider = RekognitionProvider(config)
        faces = provider.detect_faces(image_bytes)
    """
    
    def __init__(self, config: ProctorConfig, client: Optional[Any] = None):
        self.config = config
        self.client = client or boto3.client(
            "rekognition",
            region_name=config.region,
            endpoint_url=config.provider_endpoint_url,
            config=build_botocore_config(config)
        )
        logger.info(f"[Provider] Rekognition client ready (region={config.region})")
    
    def detect_faces(self, image_bytes: bytes) -> Dict[str, Any]:
        """Detect faces with the full attribute set"""
        return self.client.detect_faces(
            Image={"Bytes": image_bytes},
            Attributes=["ALL"]
        )
    
    def detect_labels(self, image_bytes: bytes, min_confidence: float) -> Dict[str, Any]:
        return self.client.detect_labels(
            Image={"Bytes": image_bytes},
            MinConfidence=min_confidence
        )
    
    def detect_moderation_labels(self, image_bytes: bytes, min_confidence: float) -> Dict[str, Any]:
        return self.client.detect_moderation_labels(
            Image={"Bytes": image_bytes},
            MinConfidence=min_confidence
        )
    
    def search_faces_by_image(
        self,
        image_bytes: bytes,
        collection_id: str,
        threshold: float,
        max_faces: int = 1
    ) -> Dict[str, Any]:
        """
        Search the collection for faces matching the largest face in the image.
        
        Rekognition raises InvalidParameterException when the image has no face.
        """
        return self.client.search_faces_by_image(
            CollectionId=collection_id,
            FaceMatchThreshold=threshold,
            MaxFaces=max_faces,
            Image={"Bytes": image_bytes}
        )
    
    def index_face(self, image_bytes: bytes, collection_id: str, external_image_id: str) -> List[str]:
        """
        Index the largest face in an image under an external id.
        
        Only one face is kept so a bystander never shares the identity token.
        
        Returns:
            Face ids assigned by the collection (empty when no face was indexed)
        """
        response = self.client.index_faces(
            CollectionId=collection_id,
            ExternalImageId=external_image_id,
            Image={"Bytes": image_bytes},
            MaxFaces=1
        )
        return [
            record["Face"]["FaceId"]
            for record in response.get("FaceRecords", [])
        ]
    
    def delete_faces(self, collection_id: str, face_ids: List[str]) -> List[str]:
        """Remove indexed faces, returns the ids actually deleted"""
        response = self.client.delete_faces(
            CollectionId=collection_id,
            FaceIds=face_ids
        )
        return response.get("DeletedFaces", [])
