from sqlalchemy import select

from src.core.base import BaseService
from src.database.models import User, UserType


class UserService(BaseService):
    async def get_user(self, wallet_address: str) -> User | None:
        stmt = select(User).where(User.wallet_address == wallet_address.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_user(self, wallet_address: str, user_type: UserType) -> User:
        """Create the user or switch its role."""
        user = await self.get_user(wallet_address)
        if user is None:
            user = User(wallet_address=wallet_address.lower(), user_type=user_type)
            self.db.add(user)
            self.logger.info("User created", wallet_address=user.wallet_address)
        else:
            user.user_type = user_type
        await self.db.commit()
        await self.db.refresh(user)
        return user
