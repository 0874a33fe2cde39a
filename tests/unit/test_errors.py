from parcels.errors import (
    HTTP_STATUS,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ParcelsError,
    StoreError,
    ValidationError,
)


def test_all_error_codes_have_http_status():
    for code in ErrorCode:
        assert code in HTTP_STATUS


def test_default_codes():
    assert ValidationError("x").status_code == 400
    assert NotFoundError("x").status_code == 404
    assert StoreError("x").status_code == 502
    assert ConflictError("x").status_code == 409


def test_conflict_is_a_store_error():
    assert issubclass(ConflictError, StoreError)
    assert issubclass(StoreError, ParcelsError)


def test_explicit_code_overrides_default():
    err = StoreError("timed out", code=ErrorCode.TIMEOUT)
    assert err.status_code == 504
    assert err.message == "timed out"
