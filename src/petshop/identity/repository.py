"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from petshop.domain import petshop
from petshop.identity.tokens import refresh_token_owner
from petshop.identity.user import User, normalize_email

SCAN_LIMIT = 10_000


@petshop.repository(part_of=User)
class UserRepository:
    def by_email(self, email) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def find(self, user_id) -> User:
        user = self._dao.query.filter(id=str(user_id)).all().first if user_id else None
        if user is None:
            raise ObjectNotFoundError("User not found")
        return user

    def find_many(self, user_ids) -> dict:
        ids = {str(uid) for uid in user_ids}
        if not ids:
            return {}
        users = self._dao.query.filter(id__in=list(ids)).limit(SCAN_LIMIT).all().items
        return {str(u.id): u for u in users}

    def by_refresh_token(self, token) -> User | None:
        """The owner of a refresh token, whether or not the token is still valid."""
        return self._dao.query.filter(id=refresh_token_owner(token)).all().first
