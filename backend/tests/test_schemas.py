"""
Tests for Pydantic schemas validation.
"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from app.models.bucket import Bucket, BucketVisibility
from app.models.gallery import Thumbnail
from app.models.media import StagedFile
from app.models.upload import UploadOutcome, UploadResult
from app.schemas.bucket import BucketCreate, BucketResponse, BucketSelect
from app.schemas.gallery import LightboxBackdropClick, LightboxOpen, LightboxResponse, ThumbnailResponse
from app.schemas.upload import StagedFileResponse, UploadResultResponse
from app.services.lightbox import LightboxState


class TestBucketSchemas:
    """Tests for bucket schemas."""

    def test_bucket_create_valid(self):
        schema = BucketCreate(name="Photos")
        assert schema.name == "Photos"

    def test_bucket_create_missing_name(self):
        """Test bucket creation without a name raises error."""
        with pytest.raises(ValidationError):
            BucketCreate()

    def test_bucket_select_missing_name(self):
        with pytest.raises(ValidationError):
            BucketSelect()

    def test_bucket_response_from_model(self):
        """Test bucket response reads the domain dataclass."""
        schema = BucketResponse.model_validate(Bucket("photos", BucketVisibility.PUBLIC))

        assert schema.name == "photos"
        assert schema.visibility == BucketVisibility.PUBLIC

    def test_bucket_response_invalid_visibility(self):
        with pytest.raises(ValidationError):
            BucketResponse(name="photos", visibility="secret")


class TestUploadSchemas:
    """Tests for staging and upload schemas."""

    def test_staged_file_response_omits_bytes(self):
        """Test staged files expose size, never their content."""
        schema = StagedFileResponse.model_validate(
            StagedFile(filename="cat.png", content_type="image/png", data=b"12345")
        )

        assert schema.size == 5
        assert "data" not in schema.model_dump()

    def test_upload_result_response_skipped(self):
        result = UploadResult(
            filename="notes.txt",
            content_type="text/plain",
            outcome=UploadOutcome.SKIPPED,
            error="Skipping non-image: notes.txt",
        )

        schema = UploadResultResponse.model_validate(result)

        assert schema.outcome == UploadOutcome.SKIPPED
        assert schema.key is None
        assert schema.error == "Skipping non-image: notes.txt"


class TestGallerySchemas:
    """Tests for gallery and lightbox schemas."""

    def test_thumbnail_response_caption_is_key(self):
        thumbnail = Thumbnail(
            key="1700000000000-cat.png",
            url="https://signed/cat",
            size=10,
            last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        schema = ThumbnailResponse.model_validate(thumbnail)

        assert schema.caption == "1700000000000-cat.png"
        assert schema.url == "https://signed/cat"

    def test_lightbox_open_default_caption(self):
        assert LightboxOpen(url="https://signed/cat").caption == ""

    def test_lightbox_open_requires_url(self):
        with pytest.raises(ValidationError):
            LightboxOpen(caption="cat")

    def test_backdrop_click_requires_target(self):
        with pytest.raises(ValidationError):
            LightboxBackdropClick()

    def test_lightbox_response_from_state(self):
        schema = LightboxResponse.model_validate(LightboxState())

        assert schema.model_dump() == {"is_open": False, "image_url": "", "caption": ""}
