from fastapi import APIRouter, Depends, Query

from src.api.core.constants import WALLET_ADDRESS_PATTERN
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import UserServiceDep
from src.api.core.messages import APIResponse, MessageCode
from src.api.users.schemas import (
    UserLookupResponse,
    UserModel,
    UserResponse,
    UserUpsertRequest,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, dependencies=[Depends(write_rate_limit)])
async def upsert_user(
    body: UserUpsertRequest,
    wallet_address: WalletAddressDep,
    service: UserServiceDep,
) -> UserResponse:
    """Register a wallet or change its marketplace role."""
    ensure_wallet_owns(wallet_address, body.wallet_address)
    user = await service.upsert_user(body.wallet_address, body.user_type)
    return APIResponse.success(
        message_code=MessageCode.USER_SAVED, data=UserModel.model_validate(user)
    )


@router.get("", response_model=UserLookupResponse, dependencies=[Depends(read_rate_limit)])
async def get_user(
    service: UserServiceDep,
    wallet_address: str = Query(..., pattern=WALLET_ADDRESS_PATTERN),
) -> UserLookupResponse:
    user = await service.get_user(wallet_address)
    return APIResponse.success(
        data=UserModel.model_validate(user) if user else None
    )
