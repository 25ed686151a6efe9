"""
Identity Store Client - DynamoDB table of enrolled identity profiles

Table layout (hash key ExternalImageId):
    CollectionId     S
    ExternalImageId  S
    FullName         S
"""

import logging
from typing import Any, Optional

import boto3

from ..config import ProctorConfig
from ..models import IdentityProfile
from .rekognition import build_botocore_config

logger = logging.getLogger(__name__)


class DynamoIdentityStore:
    """Maps an identity token to its enrolled profile"""
    
    def __init__(self, config: ProctorConfig, client: Optional[Any] = None):
        self.table_name = config.faces_table
        self.client = client or boto3.client(
            "dynamodb",
            region_name=config.region,
            endpoint_url=config.store_endpoint_url,
            config=build_botocore_config(config)
        )
        logger.info(f"[Store] DynamoDB table: {self.table_name}")
    
    def put_profile(self, profile: IdentityProfile) -> None:
        self.client.put_item(
            TableName=self.table_name,
            Item={
                "CollectionId": {"S": profile.collection_id},
                "ExternalImageId": {"S": profile.identity_token},
                "FullName": {"S": profile.full_name}
            }
        )
    
    def get_profile(self, identity_token: str) -> Optional[IdentityProfile]:
        """
        Look up a profile by identity token.
        
        Returns:
            The profile, or None when the table has no item for the token
        """
        response = self.client.get_item(
            TableName=self.table_name,
            Key={"ExternalImageId": {"S": identity_token}}
        )
        item = response.get("Item")
        if not item:
            return None
        
        return IdentityProfile(
            identity_token=item["ExternalImageId"]["S"],
            collection_id=item.get("CollectionId", {}).get("S", ""),
            full_name=item["FullName"]["S"]
        )
