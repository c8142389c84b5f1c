from typing import Dict
from uuid import UUID

from src.api.utils.jwt import create_access_token


def auth_headers(user_id: UUID) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
