"""
Pytest Configuration for Identity Proctor Tests

Provides in-memory doubles for the detection provider and the identity
store, plus a FastAPI test client wired to them.
"""
import base64
import io
import time

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from PIL import Image

from identity_proctor.proctor.config import ProctorConfig


def client_error(code: str, operation: str = "Operation", message: str = "error") -> ClientError:
    """Build a botocore ClientError the way AWS reports it"""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def make_face(
    eyes_open=True,
    mouth_open=False,
    pitch=4.5,
    roll=-2.25,
    yaw=10.0,
    emotion="CALM",
    landmark_y=0.42
):
    """One FaceDetails entry with the attributes the face-quality check reads"""
    return {
        "EyesOpen": {"Value": eyes_open, "Confidence": 99.0},
        "MouthOpen": {"Value": mouth_open, "Confidence": 98.0},
        "Pose": {"Pitch": pitch, "Roll": roll, "Yaw": yaw},
        "Emotions": [{"Type": emotion, "Confidence": 90.0}],
        "Landmarks": [{"Type": "eyeLeft", "X": 0.3, "Y": landmark_y}],
    }


def make_label(name, instances=0):
    return {"Name": name, "Confidence": 95.0, "Instances": [{"Confidence": 95.0}] * instances}


class FakeProvider:
    """
    In-memory stand-in for the Rekognition provider.
    
    Responses are set per capability; an entry in `errors` makes that
    capability raise instead. Indexed faces are matched by exact image bytes.
    """
    
    def __init__(self):
        self.faces = {"FaceDetails": [make_face()]}
        self.labels = {"Labels": [make_label("Person", 1)]}
        self.moderation = {"ModerationLabels": []}
        self.errors = {}
        self.delay = 0.0
        self.collection = {}
        self.deleted = []
        self.calls = []
        self._face_counter = 0
    
    def _enter(self, capability):
        self.calls.append(capability)
        if self.delay:
            time.sleep(self.delay)
        if capability in self.errors:
            raise self.errors[capability]
    
    def detect_faces(self, image_bytes):
        self._enter("detect_faces")
        return self.faces
    
    def detect_labels(self, image_bytes, min_confidence):
        self._enter("detect_labels")
        return self.labels
    
    def detect_moderation_labels(self, image_bytes, min_confidence):
        self._enter("detect_moderation_labels")
        return self.moderation
    
    def search_faces_by_image(self, image_bytes, collection_id, threshold, max_faces=1):
        self._enter("search_faces_by_image")
        matches = [
            {"Similarity": 99.5, "Face": {"FaceId": face_id, "ExternalImageId": token}}
            for face_id, (token, indexed_bytes) in self.collection.items()
            if indexed_bytes == image_bytes
        ]
        return {"FaceMatches": matches[:max_faces]}
    
    def index_face(self, image_bytes, collection_id, external_image_id):
        self._enter("index_face")
        self._face_counter += 1
        face_id = f"face-{self._face_counter}"
        self.collection[face_id] = (external_image_id, image_bytes)
        return [face_id]
    
    def delete_faces(self, collection_id, face_ids):
        self._enter("delete_faces")
        for face_id in face_ids:
            self.collection.pop(face_id, None)
        self.deleted.extend(face_ids)
        return face_ids


class FakeStore:
    """In-memory stand-in for the DynamoDB identity store"""
    
    def __init__(self):
        self.profiles = {}
        self.errors = {}
    
    def put_profile(self, profile):
        if "put_profile" in self.errors:
            raise self.errors["put_profile"]
        self.profiles[profile.identity_token] = profile
    
    def get_profile(self, identity_token):
        if "get_profile" in self.errors:
            raise self.errors["get_profile"]
        return self.profiles.get(identity_token)


def encode_image(color=(120, 90, 60), size=(32, 32), fmt="JPEG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def config():
    """Proctor configuration with a short timeout"""
    return ProctorConfig(
        collection_id="test-collection",
        faces_table="test-faces",
        min_confidence=80.0,
        objects_of_interest=("Mobile Phone", "Book", "Laptop"),
        check_timeout_seconds=1.0
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def image_bytes():
    return encode_image()


@pytest.fixture
def image_b64(image_bytes):
    return base64.b64encode(image_bytes).decode("ascii")


@pytest.fixture
def client(config, provider, store):
    """FastAPI test client with collaborators replaced by fakes"""
    from identity_proctor.main import app
    from identity_proctor.proctor import api
    
    app.dependency_overrides[api.get_config] = lambda: config
    app.dependency_overrides[api.get_provider] = lambda: provider
    app.dependency_overrides[api.get_store] = lambda: store
    
    yield TestClient(app)
    
    app.dependency_overrides.clear()
