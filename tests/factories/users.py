"""Factory for User models."""

import factory

from src.database.models import User, UserType
from .base import AsyncSQLAlchemyModelFactory, wallet_address


class UserFactory(AsyncSQLAlchemyModelFactory[User]):
    """Factory for creating User instances."""

    class Meta:
        model = User

    wallet_address = factory.Sequence(lambda n: wallet_address(0x1000 + n))
    user_type = UserType.CONSUMER
