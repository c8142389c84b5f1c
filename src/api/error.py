from typing import NoReturn

from fastapi import status

from libs.result import Error
from src.domain.errors import Conflict, Forbidden, NotFound


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


_STATUS_BY_KIND = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (Forbidden, status.HTTP_403_FORBIDDEN),
)


def raise_error(error: Error) -> NoReturn:
    """Translate a use case error into the matching HTTP exception"""
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(error, kind):
            raise ClientError(error, status_code=status_code)
    raise ServerError(error)
