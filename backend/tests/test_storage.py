"""
Tests for storage clients.
The S3 client is exercised offline with botocore's Stubber.
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from botocore.stub import Stubber

from app.errors import BucketAlreadyExistsError, RemoteError, StorageNotConfiguredError
from app.models.bucket import BucketVisibility
from app.storage import InMemoryStorageClient, S3StorageClient, build_storage_client
from app.storage.memory import parse_size_limit


@pytest.fixture
def s3_client() -> S3StorageClient:
    """S3 client pointed at a local endpoint; no requests leave the process."""
    return S3StorageClient(
        endpoint="http://localhost:9000",
        access_key="test-access",
        secret_key="test-secret",
        region="auto",
        public_url="https://cdn.example.com/storage/v1/object/public/",
    )


@pytest.fixture
def stubber(s3_client: S3StorageClient):
    with Stubber(s3_client._client) as stub:
        yield stub
        stub.assert_no_pending_responses()


class TestInMemoryStorageClient:
    """Tests for InMemoryStorageClient."""

    @pytest.mark.parametrize("limit,expected", [
        ("50MB", 50 * 1024 * 1024),
        ("1kb", 1024),
        ("10", 10),
        ("2 GB", 2 * 1024 ** 3),
    ])
    def test_parse_size_limit(self, limit, expected):
        assert parse_size_limit(limit) == expected

    def test_parse_size_limit_invalid(self):
        with pytest.raises(ValueError):
            parse_size_limit("fifty")

    def test_create_and_list_buckets(self, storage: InMemoryStorageClient):
        """Test created buckets are listed with their visibility."""
        storage.create_bucket("private-one")
        storage.create_bucket("public-one", public=True)

        buckets = {b.name: b.visibility for b in storage.list_buckets()}

        assert buckets == {
            "private-one": BucketVisibility.PRIVATE,
            "public-one": BucketVisibility.PUBLIC,
        }

    def test_upload_no_overwrite(self, photos_storage: InMemoryStorageClient):
        """Test a second upload to the same key is rejected without overwrite."""
        photos_storage.upload("photos", "a.png", b"one", "image/png")

        with pytest.raises(RemoteError, match="already exists"):
            photos_storage.upload("photos", "a.png", b"two", "image/png")

        photos_storage.upload("photos", "a.png", b"three", "image/png", overwrite=True)
        assert photos_storage.get_object("photos", "a.png") == b"three"

    def test_upload_size_limit(self, storage: InMemoryStorageClient):
        """Test the bucket size policy is enforced."""
        storage.create_bucket("tiny", file_size_limit="4B")

        with pytest.raises(RemoteError, match="maximum allowed size"):
            storage.upload("tiny", "a.png", b"12345", "image/png")

    def test_upload_unknown_bucket(self, storage: InMemoryStorageClient):
        with pytest.raises(RemoteError, match="Bucket not found"):
            storage.upload("missing", "a.png", b"x", "image/png")

    def test_list_objects_limit(self, photos_storage: InMemoryStorageClient):
        """Test listing is sorted by key and capped."""
        for key in ["c", "a", "b"]:
            photos_storage.upload("photos", key, b"x", "image/png")

        assert [o.key for o in photos_storage.list_objects("photos", limit=2)] == ["a", "b"]

    def test_signed_url_missing_object(self, photos_storage: InMemoryStorageClient):
        with pytest.raises(RemoteError, match="Object not found"):
            photos_storage.create_signed_url("photos", "nope.png")


class TestS3StorageClient:
    """Tests for S3StorageClient."""

    def test_not_configured(self):
        """Test operations fail cleanly without credentials."""
        client = S3StorageClient(endpoint=None, access_key=None, secret_key=None)

        assert not client.is_configured
        with pytest.raises(StorageNotConfiguredError):
            client.list_buckets()
        with pytest.raises(StorageNotConfiguredError):
            client.upload("photos", "a.png", b"x", "image/png")

    def test_list_buckets_reads_visibility_tags(self, s3_client, stubber):
        """Test bucket visibility comes from tags, defaulting to private."""
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        stubber.add_response(
            "list_buckets",
            {"Buckets": [{"Name": "photos", "CreationDate": created}, {"Name": "assets", "CreationDate": created}]},
            {},
        )
        stubber.add_client_error(
            "get_bucket_tagging",
            service_error_code="NoSuchTagSet",
            http_status_code=404,
            expected_params={"Bucket": "photos"},
        )
        stubber.add_response(
            "get_bucket_tagging",
            {"TagSet": [{"Key": "visibility", "Value": "public"}]},
            {"Bucket": "assets"},
        )

        buckets = s3_client.list_buckets()

        assert [(b.name, b.visibility) for b in buckets] == [
            ("photos", BucketVisibility.PRIVATE),
            ("assets", BucketVisibility.PUBLIC),
        ]

    def test_list_buckets_error(self, s3_client, stubber):
        stubber.add_client_error(
            "list_buckets",
            service_error_code="InvalidAccessKeyId",
            service_message="The access key does not exist",
            http_status_code=403,
        )

        with pytest.raises(RemoteError, match="The access key does not exist"):
            s3_client.list_buckets()

    def test_create_bucket_tags_policy(self, s3_client, stubber):
        """Test a private bucket is created and tagged with the size limit."""
        stubber.add_response("create_bucket", {"Location": "/photos"}, {"Bucket": "photos"})
        stubber.add_response(
            "put_bucket_tagging",
            {},
            {
                "Bucket": "photos",
                "Tagging": {
                    "TagSet": [
                        {"Key": "visibility", "Value": "private"},
                        {"Key": "file-size-limit", "Value": "50MB"},
                    ]
                },
            },
        )

        bucket = s3_client.create_bucket("photos", public=False, file_size_limit="50MB")

        assert bucket.name == "photos"
        assert bucket.visibility == BucketVisibility.PRIVATE

    def test_create_bucket_tagging_unsupported(self, s3_client, stubber):
        """Test providers without tagging still create the bucket."""
        stubber.add_response("create_bucket", {}, {"Bucket": "photos"})
        stubber.add_client_error("put_bucket_tagging", service_error_code="NotImplemented", http_status_code=501)

        assert s3_client.create_bucket("photos").name == "photos"

    @pytest.mark.parametrize("code", ["BucketAlreadyOwnedByYou", "BucketAlreadyExists"])
    def test_create_bucket_already_exists(self, s3_client, stubber, code):
        stubber.add_client_error("create_bucket", service_error_code=code, http_status_code=409)

        with pytest.raises(BucketAlreadyExistsError):
            s3_client.create_bucket("photos")

    def test_create_bucket_other_error(self, s3_client, stubber):
        stubber.add_client_error(
            "create_bucket",
            service_error_code="InvalidBucketName",
            service_message="The specified bucket is not valid.",
            http_status_code=400,
        )

        with pytest.raises(RemoteError, match="not valid") as exc_info:
            s3_client.create_bucket("Bad_Name")
        assert not isinstance(exc_info.value, BucketAlreadyExistsError)

    def test_list_objects_includes_folders_sorted(self, s3_client, stubber):
        """Test files and folder prefixes come back ordered by key."""
        modified = datetime(2024, 5, 1, tzinfo=timezone.utc)
        stubber.add_response(
            "list_objects_v2",
            {
                "Contents": [
                    {"Key": "b.png", "Size": 20, "LastModified": modified},
                    {"Key": "a.png", "Size": 10, "LastModified": modified},
                ],
                "CommonPrefixes": [{"Prefix": "albums/"}],
            },
            {"Bucket": "photos", "Prefix": "", "Delimiter": "/", "MaxKeys": 1000},
        )

        objects = s3_client.list_objects("photos", "", limit=1000)

        assert [o.key for o in objects] == ["a.png", "albums/", "b.png"]
        assert [o.is_folder for o in objects] == [False, True, False]
        assert objects[0].size == 10

    def test_upload_no_overwrite(self, s3_client, stubber):
        """Test uploads send a conditional write and the cache directive."""
        stubber.add_response(
            "put_object",
            {"ETag": '"abc"'},
            {
                "Bucket": "photos",
                "Key": "1-cat.png",
                "Body": b"img",
                "ContentType": "image/png",
                "CacheControl": "max-age=3600",
                "IfNoneMatch": "*",
            },
        )

        assert s3_client.upload("photos", "1-cat.png", b"img", "image/png") == "1-cat.png"

    def test_upload_existing_key(self, s3_client, stubber):
        stubber.add_client_error("put_object", service_error_code="PreconditionFailed", http_status_code=412)

        with pytest.raises(RemoteError, match="already exists"):
            s3_client.upload("photos", "1-cat.png", b"img", "image/png")

    def test_signed_url(self, s3_client):
        """Test signed URLs are path-style and carry the expiry."""
        url = s3_client.create_signed_url("photos", "cat.png", 3600)

        assert url.startswith("http://localhost:9000/photos/cat.png?")
        assert "X-Amz-Expires=3600" in url
        assert "X-Amz-Signature=" in url

    def test_public_url(self, s3_client):
        assert s3_client.get_public_url("photos", "my cat.png") == (
            "https://cdn.example.com/storage/v1/object/public/photos/my%20cat.png"
        )

    def test_public_url_falls_back_to_endpoint(self):
        client = S3StorageClient(endpoint="http://localhost:9000/", access_key="a", secret_key="b")
        assert client.get_public_url("photos", "a.png") == "http://localhost:9000/photos/a.png"


class TestBuildStorageClient:
    """Tests for backend selection."""

    def test_memory_backend(self):
        with patch("app.storage.settings") as mock_settings:
            mock_settings.storage_backend = "memory"
            assert isinstance(build_storage_client(), InMemoryStorageClient)

    def test_unknown_backend(self):
        with patch("app.storage.settings") as mock_settings:
            mock_settings.storage_backend = "ftp"
            with pytest.raises(ValueError, match="Unknown storage backend"):
                build_storage_client()
