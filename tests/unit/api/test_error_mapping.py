import pytest
from fastapi import status

from libs.result import Error
from src.api.error import ClientError, ServerError, raise_error
from src.domain.errors import Conflict, Forbidden, NotFound


@pytest.mark.parametrize(
    "error, expected",
    [
        (NotFound("X", "x"), status.HTTP_404_NOT_FOUND),
        (Conflict("X", "x"), status.HTTP_409_CONFLICT),
        (Forbidden("X", "x"), status.HTTP_403_FORBIDDEN),
    ],
)
def test_business_errors_map_to_client_errors(error, expected):
    with pytest.raises(ClientError) as exc_info:
        raise_error(error)

    assert exc_info.value.status_code == expected
    assert exc_info.value.base_error is error


def test_plain_error_is_server_error():
    with pytest.raises(ServerError):
        raise_error(Error("DATABASE_ERROR", "boom"))
