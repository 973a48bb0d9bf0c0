"""
Tests for StoreError and error classification.
"""

import pytest
from google.api_core import exceptions as gexc

from sneaker_collection import PreviewTimeoutError, StoreError, StoreErrorCode
from sneaker_collection.errors import classify_store_error


class TestClassifyStoreError:
    """Tests for classify_store_error."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (gexc.NotFound("missing"), StoreErrorCode.NOT_FOUND),
            (gexc.PermissionDenied("no"), StoreErrorCode.PERMISSION_DENIED),
            (gexc.Unauthenticated("who"), StoreErrorCode.UNAUTHENTICATED),
            (gexc.InvalidArgument("bad"), StoreErrorCode.INVALID_ARGUMENT),
            (gexc.AlreadyExists("dup"), StoreErrorCode.ALREADY_EXISTS),
            (gexc.Aborted("contention"), StoreErrorCode.ABORTED),
            (gexc.ServiceUnavailable("down"), StoreErrorCode.UNAVAILABLE),
            (gexc.DeadlineExceeded("slow"), StoreErrorCode.DEADLINE_EXCEEDED),
            (ConnectionError("reset"), StoreErrorCode.UNAVAILABLE),
            (TimeoutError("slow"), StoreErrorCode.DEADLINE_EXCEEDED),
        ],
    )
    def test_known_exceptions(self, error, code):
        assert classify_store_error(error) == code

    def test_permission_hint_in_message(self):
        error = RuntimeError("Missing or insufficient permissions")
        assert classify_store_error(error) == StoreErrorCode.PERMISSION_DENIED

    def test_unknown_is_internal(self):
        assert classify_store_error(RuntimeError("boom")) == StoreErrorCode.INTERNAL

    def test_store_error_keeps_code(self):
        error = StoreError("x", code=StoreErrorCode.ABORTED)
        assert classify_store_error(error) == StoreErrorCode.ABORTED


class TestStoreError:
    """Tests for StoreError."""

    def test_from_exception(self):
        cause = gexc.NotFound("no such document")

        error = StoreError.from_exception(
            cause, collection="sneaker_collection", document="abc"
        )

        assert error.code == StoreErrorCode.NOT_FOUND
        assert "NotFound" in error.message
        assert error.collection == "sneaker_collection"
        assert error.document == "abc"

    def test_from_store_error_returns_same_instance(self):
        error = StoreError("already translated")
        assert StoreError.from_exception(error) is error

    def test_to_dict(self):
        error = StoreError(
            "denied",
            code=StoreErrorCode.PERMISSION_DENIED,
            collection="sneaker_collection",
        )
        assert error.to_dict() == {
            "code": "PERMISSION_DENIED",
            "message": "denied",
            "collection": "sneaker_collection",
        }

    def test_str_is_message(self):
        assert str(StoreError("write rejected")) == "write rejected"

    def test_preview_timeout_is_timeout(self):
        assert issubclass(PreviewTimeoutError, TimeoutError)
