"""
Credential store and account provisioning.
"""
from typing import List, Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizroom.core.config import Settings
from quizroom.core.errors import Conflict, NotFound, Unauthorized, ValidationError
from quizroom.core.security import Identity, PasswordHasher
from quizroom.models.orm import Role, User
from quizroom.services.authorization import ensure_can_change_role, ensure_can_create, ensure_can_delete

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.username == username))

    def insert(self, username: str, password_hash: str, role: Role) -> User:
        user = User(username=username, password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Username already exists")
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        user = self.get(user_id)
        if user is None:
            return False
        self.db.delete(user)
        self.db.commit()
        return True

    def update_role(self, user_id: int, role: Role) -> Optional[User]:
        user = self.get(user_id)
        if user is None:
            return None
        user.role = role
        self.db.commit()
        self.db.refresh(user)
        return user

    def list_all(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))

    def list_pupils(self) -> List[User]:
        return list(self.db.scalars(select(User).where(User.role == Role.PUPIL).order_by(User.id)))

    def count(self, role: Role) -> int:
        return self.db.scalar(select(func.count(User.id)).where(User.role == role)) or 0


class UserService:
    """Registration, login and privileged account management."""

    def __init__(self, db: Session, settings: Settings, hasher: PasswordHasher):
        self.users = UserRepository(db)
        self.settings = settings
        self.hasher = hasher

    def _is_reserved(self, username: str) -> bool:
        return username.strip().lower() == self.settings.OWNER_USERNAME.lower()

    def register(self, username: str, password: str) -> User:
        if self._is_reserved(username):
            raise ValidationError(f'Username "{self.settings.OWNER_USERNAME}" is reserved for the owner.')
        user = self.users.insert(username, self.hasher.hash(password), Role.PUPIL)
        logger.info(f"Registered pupil {user.username} (id={user.id})")
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.users.find_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise Unauthorized("Invalid credentials")
        return user

    def list_users(self) -> List[User]:
        return self.users.list_all()

    def create(self, identity: Identity, username: str, password: str, role: Role) -> User:
        ensure_can_create(identity, role)
        if self._is_reserved(username):
            raise ValidationError(f'Username "{self.settings.OWNER_USERNAME}" is reserved for the owner.')
        user = self.users.insert(username, self.hasher.hash(password), role)
        logger.info(f"User {identity.id} added {user.username} as {role.value}")
        return user

    def change_role(self, identity: Identity, user_id: int, role: Role) -> User:
        target = self.users.get(user_id)
        if target is None:
            raise NotFound("User not found")
        ensure_can_change_role(identity, target, role)
        user = self.users.update_role(user_id, role)
        if user is None:
            raise NotFound("User not found")
        logger.info(f"User {identity.id} changed role of {user.username} to {role.value}")
        return user

    def delete(self, identity: Identity, user_id: int) -> None:
        target = self.users.get(user_id)
        if target is None:
            raise NotFound("User not found")
        ensure_can_delete(identity, target)
        if not self.users.delete(user_id):
            raise NotFound("User not found")
        logger.info(f"User {identity.id} deleted user {user_id}")

    def seed_owner(self) -> User:
        """Create the owner account on first startup; no-op afterwards."""
        owner = self.users.find_by_username(self.settings.OWNER_USERNAME)
        if owner is not None:
            return owner
        owner = self.users.insert(
            self.settings.OWNER_USERNAME,
            self.hasher.hash(self.settings.OWNER_PASSWORD.get_secret_value()),
            Role.OWNER,
        )
        logger.info(f'Owner "{owner.username}" created successfully.')
        return owner
