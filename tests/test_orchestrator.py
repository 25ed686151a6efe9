"""
Tests for the Verification Orchestrator

The report always has 12 records in a fixed order, whatever fails.
"""
import base64

import pytest

from conftest import client_error, encode_image, make_face, make_label
from identity_proctor.proctor.config import ProctorConfig
from identity_proctor.proctor.exceptions import ImageDecodeError
from identity_proctor.proctor.orchestrator import VerificationOrchestrator, decode_image

REPORT_ORDER = [
    "Objects of Interest",
    "Person Detection",
    "Person Recognition",
    "Face Detection",
    "Eyes Open Detection",
    "Mouth Open Detection",
    "Pitch Detection",
    "Roll Detection",
    "Yaw Detection",
    "Emotion Detection",
    "Eyes Detection",
    "Unsafe Content",
]


class TestDecodeImage:
    """Tests for decode_image"""
    
    def test_valid_jpeg(self, image_b64, image_bytes):
        """A base64 JPEG decodes to its bytes"""
        assert decode_image(image_b64) == image_bytes
    
    def test_data_url(self, image_b64, image_bytes):
        """A browser data URL prefix is stripped"""
        assert decode_image(f"data:image/jpeg;base64,{image_b64}") == image_bytes
    
    def test_png(self):
        """Other image formats are accepted"""
        png = encode_image(fmt="PNG")
        assert decode_image(base64.b64encode(png).decode()) == png
    
    def test_line_wrapped_base64(self, image_bytes):
        """Base64 wrapped with newlines decodes like the unwrapped form"""
        wrapped = base64.encodebytes(image_bytes).decode("ascii")

        assert "\n" in wrapped
        assert decode_image(wrapped) == image_bytes

    def test_oversized_image_passes_through(self, image_b64, image_bytes, monkeypatch):
        """An image above Pillow's pixel limit is left for the checks to judge"""
        from PIL import Image

        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        assert decode_image(image_b64) == image_bytes

    def test_whitespace_only(self):
        """Whitespace alone is an empty image"""
        with pytest.raises(ImageDecodeError):
            decode_image(" \n ")

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value):
        """A missing image is rejected"""
        with pytest.raises(ImageDecodeError):
            decode_image(value)
    
    def test_not_base64(self):
        """Garbage text is rejected"""
        with pytest.raises(ImageDecodeError):
            decode_image("not base64 at all!")
    
    def test_not_an_image(self):
        """Valid base64 of non-image bytes is rejected"""
        with pytest.raises(ImageDecodeError):
            decode_image(base64.b64encode(b"plain text, not pixels").decode())


class TestVerificationOrchestrator:
    """Tests for VerificationOrchestrator"""
    
    @pytest.mark.asyncio
    async def test_report_order(self, config, provider, store, image_bytes):
        """The report lists every record in the documented order"""
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        records = await orchestrator.verify(image_bytes)
        
        assert [r.name for r in records] == REPORT_ORDER
        assert orchestrator.record_names == REPORT_ORDER
    
    @pytest.mark.asyncio
    async def test_all_collaborators_failing(self, config, provider, store, image_bytes):
        """Every check failing still yields a full report"""
        for capability in ("detect_faces", "detect_labels", "detect_moderation_labels", "search_faces_by_image"):
            provider.errors[capability] = client_error("ServiceUnavailableException")
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        records = await orchestrator.verify(image_bytes)
        by_name = {r.name: r for r in records}
        
        assert [r.name for r in records] == REPORT_ORDER
        assert not any(r.success for r in records)
        assert by_name["Person Recognition"].details == "0"
        assert all(
            r.details == "Server error" for r in records if r.name != "Person Recognition"
        )
    
    @pytest.mark.asyncio
    async def test_one_check_failing_is_isolated(self, config, provider, store, image_bytes):
        """A failing face check leaves the other checks untouched"""
        provider.errors["detect_faces"] = client_error("ThrottlingException")
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        records = await orchestrator.verify(image_bytes)
        by_name = {r.name: r for r in records}
        
        assert by_name["Face Detection"].details == "Server error"
        assert by_name["Objects of Interest"].success is True
        assert by_name["Person Detection"].success is True
        assert by_name["Unsafe Content"].success is True
    
    @pytest.mark.asyncio
    async def test_slow_check_times_out(self, provider, store, image_bytes):
        """A stalled provider cannot hold the report past the branch timeout"""
        config = ProctorConfig(collection_id="c", faces_table="t", check_timeout_seconds=0.05)
        provider.delay = 0.3
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        records = await orchestrator.verify(image_bytes)
        
        assert len(records) == 12
        assert not any(r.success for r in records)
    
    @pytest.mark.asyncio
    async def test_two_faces_scenario(self, config, provider, store, image_bytes):
        """Two faces, no objects, no moderation flags, no match"""
        provider.faces = {"FaceDetails": [make_face(), make_face()]}
        provider.labels = {"Labels": [make_label("Person", 2)]}
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        records = await orchestrator.verify(image_bytes)
        by_name = {r.name: (r.success, r.details) for r in records}
        
        assert by_name["Face Detection"] == (False, "2")
        assert by_name["Objects of Interest"] == (True, "0")
        assert by_name["Person Detection"] == (False, "2")
        assert by_name["Unsafe Content"] == (True, "0")
        assert by_name["Person Recognition"] == (False, "0")
    
    @pytest.mark.asyncio
    async def test_empty_image_rejected(self, config, provider, store):
        """Empty bytes are a caller error, not a check outcome"""
        orchestrator = VerificationOrchestrator.from_config(config, provider, store)
        
        with pytest.raises(ImageDecodeError):
            await orchestrator.verify(b"")
        
        assert provider.calls == []
