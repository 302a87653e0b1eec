"""
Tests for console utilities: studio links, status board and log helpers.
"""
import logging
import pytest

from app.services.status_board import StatusBoard, StatusKind
from app.utils.logging import _build_log_extra, log_upload_failed
from app.utils.studio import compute_studio_bucket_url


class TestStudioLinks:
    """Tests for dashboard deep links."""

    def test_full_link(self):
        url = compute_studio_bucket_url("photos", studio_url="https://studio.example.com/", project_ref="abc")
        assert url == "https://studio.example.com/project/abc/storage/buckets/photos"

    def test_base_only(self):
        assert compute_studio_bucket_url("photos", studio_url="https://studio.example.com") == (
            "https://studio.example.com"
        )

    def test_fallback_to_endpoint(self):
        url = compute_studio_bucket_url("photos", project_ref="abc", fallback_url="https://x.example.com")
        assert url == "https://x.example.com/project/abc/storage/buckets/photos"

    def test_no_base(self):
        assert compute_studio_bucket_url("photos", project_ref="abc") is None


class TestStatusBoard:
    """Tests for the status line and bounded log."""

    def test_log_is_bounded(self):
        board = StatusBoard(max_entries=2)
        for i in range(3):
            board.log(f"entry {i}")

        assert [e.message for e in board.entries()] == ["entry 1", "entry 2"]

    def test_set_status_accepts_string_kind(self):
        board = StatusBoard()
        status = board.set_status("warning", "Could not load buckets (check storage credentials).")

        assert status.kind == StatusKind.WARNING

    def test_clear(self):
        board = StatusBoard()
        board.set_status(StatusKind.ERROR, "boom")
        board.log("boom")

        board.clear()

        assert board.entries() == []
        assert board.status.text == ""

    def test_log_forwards_to_logger(self, caplog):
        board = StatusBoard()
        with caplog.at_level(logging.INFO, logger="app.console"):
            board.log("Bucket ready: photos", {"bucket": "photos"})

        record = caplog.records[-1]
        assert record.getMessage() == "Bucket ready: photos"
        assert record.detail == {"bucket": "photos"}


class TestLogHelpers:
    """Tests for structured log fields."""

    def test_build_log_extra_optional_fields(self):
        extra = _build_log_extra("upload_completed", bucket="photos", duration_ms=12.3456, count=2)

        assert extra == {"event": "upload_completed", "bucket": "photos", "duration_ms": 12.35, "count": 2}

    @pytest.mark.parametrize("skipped,level", [(True, logging.INFO), (False, logging.ERROR)])
    def test_upload_failed_level(self, caplog, skipped, level):
        logger = logging.getLogger("test.uploads")
        with caplog.at_level(logging.INFO, logger="test.uploads"):
            log_upload_failed(logger, bucket="photos", filename="notes.txt", error="nope", skipped=skipped)

        assert caplog.records[-1].levelno == level
        assert caplog.records[-1].event == "upload_failed"
