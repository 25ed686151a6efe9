"""Collaborator clients: detection provider and identity store"""

from .rekognition import RekognitionProvider, build_botocore_config
from .identity_store import DynamoIdentityStore

__all__ = ["RekognitionProvider", "DynamoIdentityStore", "build_botocore_config"]
