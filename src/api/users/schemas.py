"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel

from src.api.core.messages import APIResponse
from src.api.core.types import WalletAddress
from src.database.models import UserType


class UserModel(BaseModel):
    id: int
    wallet_address: str
    user_type: UserType
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserUpsertRequest(BaseModel):
    wallet_address: WalletAddress
    user_type: UserType


UserResponse = APIResponse[UserModel]
UserLookupResponse = APIResponse[UserModel | None]
