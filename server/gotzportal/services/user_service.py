"""Admin accounts: password login, self-registration and user management."""

import asyncio
import logging
from typing import Any, Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import DEFAULT_ADMIN_EMAIL, settings
from ..core.database import has_db
from ..core.exceptions import (
    ConflictError,
    InternalServerError,
    InvalidCredentialsError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from ..models.user import User
from ..schemas.user import (
    MIN_PASSWORD_LENGTH,
    AdminUser,
    LoginResponse,
    LoginUser,
    NewUser,
    RegisteredUser,
    RegisterResponse,
)
from .resolution import resolve_write
from .serialization import to_iso

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72

LEGACY_ADMIN_ID = 1
LEGACY_ADMIN_NAME = "Admin"

CREDENTIALS_REQUIRED_DETAIL = "Email and password are required."
PASSWORD_TOO_SHORT_DETAIL = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
LOGIN_FAILURE_DETAIL = "Something went wrong. Try again or check server logs."
REGISTRATION_UNAVAILABLE_DETAIL = "Registration is not available."
ACCOUNT_EXISTS_DETAIL = "An account with this email already exists."
USER_EXISTS_DETAIL = "A user with this email already exists."


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], password_hash.encode("utf-8"))
    except ValueError:
        return False


def legacy_login_allowed(email: str, password: str) -> bool:
    """
    The single shared-password login.

    With no ADMIN_PASSWORD configured any credentials pass; production
    refuses to start in that state. Otherwise the password must equal it and
    the email must be ADMIN_EMAIL, unless ADMIN_EMAIL was left at its default.
    """
    if not settings.admin_password:
        return True
    if password != settings.admin_password:
        return False
    return email == settings.admin_email or settings.admin_email == DEFAULT_ADMIN_EMAIL


def _text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    return value if isinstance(value, str) else ""


def parse_new_user(payload: dict[str, Any], with_role: bool = False) -> NewUser:
    """
    Validate registration / user-creation input.

    Raises:
        ValidationError: Missing email or password, or a short password
    """
    email = _text(payload, "email").strip().lower()
    password = _text(payload, "password")
    name = _text(payload, "name").strip() or None

    if not email or not password:
        raise ValidationError(detail=CREDENTIALS_REQUIRED_DETAIL)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(detail=PASSWORD_TOO_SHORT_DETAIL)

    fields = {"email": email, "password": password, "name": name}
    if with_role and _text(payload, "role").strip():
        fields["role"] = _text(payload, "role").strip()
    return NewUser(**fields)


def to_admin_user(user: User) -> AdminUser:
    return AdminUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=to_iso(user.created_at),
    )


class UserService:
    """Service for admin accounts; every write needs a database."""

    def __init__(self, db: Optional[AsyncSession]):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower(), User.deleted_at.is_(None))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def login(self, payload: dict[str, Any]) -> LoginResponse:
        """
        Exchange credentials for the admin bearer token.

        A matching database account wins; otherwise the shared-password login
        is tried.

        Raises:
            ValidationError: Missing email or password
            InvalidCredentialsError: Neither path accepted the credentials
            InternalServerError: The account lookup failed
        """
        email = _text(payload, "email").strip()
        password = _text(payload, "password")
        if not email or not password:
            raise ValidationError(detail=CREDENTIALS_REQUIRED_DETAIL)

        if has_db():
            try:
                user = await self.get_by_email(email)
                matched = bool(user and user.password_hash) and await asyncio.to_thread(
                    verify_password, password, user.password_hash
                )
            except Exception as e:
                logger.error("Login lookup failed", extra={"error": str(e)}, exc_info=True)
                raise InternalServerError(detail=LOGIN_FAILURE_DETAIL) from e
            if matched:
                logger.info("Admin login", extra={"user_id": user.id, "method": "account"})
                return LoginResponse(
                    token=settings.admin_token,
                    user=LoginUser(id=user.id, name=user.name or LEGACY_ADMIN_NAME, email=user.email),
                )

        if not legacy_login_allowed(email, password):
            logger.warning("Admin login rejected", extra={"email_domain": email.rpartition("@")[2]})
            raise InvalidCredentialsError()

        logger.info("Admin login", extra={"user_id": LEGACY_ADMIN_ID, "method": "shared_password"})
        return LoginResponse(
            token=settings.admin_token,
            user=LoginUser(id=LEGACY_ADMIN_ID, name=LEGACY_ADMIN_NAME, email=email or settings.admin_email),
        )

    @staticmethod
    def ensure_registration_available() -> None:
        """
        Raises:
            ServiceUnavailableError: Without a database there is nowhere to keep accounts
        """
        if not has_db():
            raise ServiceUnavailableError(detail=REGISTRATION_UNAVAILABLE_DETAIL)

    async def _insert(self, new_user: NewUser, conflict_detail: str) -> User:
        if await self.get_by_email(new_user.email) is not None:
            raise ConflictError(detail=conflict_detail)
        password_hash = await asyncio.to_thread(hash_password, new_user.password)
        user = User(email=new_user.email, password_hash=password_hash, name=new_user.name, role=new_user.role)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def register(self, payload: dict[str, Any]) -> RegisterResponse:
        """
        Create an account from the public sign-up form.

        Raises:
            ServiceUnavailableError: No database configured
            ValidationError: Missing fields or a short password
            ConflictError: The email is taken
        """
        self.ensure_registration_available()
        new_user = parse_new_user(payload)

        async def insert() -> User:
            return await self._insert(new_user, ACCOUNT_EXISTS_DETAIL)

        user, _ = await resolve_write(insert)
        logger.info("Account registered", extra={"user_id": user.id})
        return RegisterResponse(
            user=RegisteredUser(id=user.id, email=user.email, name=user.name or user.email),
        )

    async def list_users(self) -> list[AdminUser]:
        """Live accounts, newest first; empty without a database."""
        if not has_db():
            return []
        stmt = select(User).where(User.deleted_at.is_(None)).order_by(User.created_at.desc(), User.id.desc())
        result = await self.db.execute(stmt)
        return [to_admin_user(user) for user in result.scalars().all()]

    async def create_user(self, payload: dict[str, Any]) -> AdminUser:
        """
        Create an account from the admin console; ``role`` defaults to ``admin``.

        Raises:
            BackendNotConfiguredError: No database configured
            ValidationError: Missing fields or a short password
            ConflictError: The email is taken
        """
        async def insert() -> User:
            return await self._insert(parse_new_user(payload, with_role=True), USER_EXISTS_DETAIL)

        user, _ = await resolve_write(insert)
        logger.info("Account created by admin", extra={"user_id": user.id, "role": user.role})
        return to_admin_user(user)

    async def seed_admin(self, email: str, password: str, name: Optional[str] = "Admin") -> Optional[User]:
        """
        Create the first admin account unless the email is already taken.

        Returns:
            The new user, or None when the account already existed
        """
        new_user = parse_new_user({"email": email, "password": password, "name": name})
        if await self.get_by_email(new_user.email) is not None:
            logger.info("Admin account already exists, skipping seed", extra={"email": new_user.email})
            return None
        return await self._insert(new_user, USER_EXISTS_DETAIL)

    async def reset_password(self, email: str, new_password: str, new_email: Optional[str] = None) -> User:
        """
        Set a new password, and optionally move the account to a new email.

        Raises:
            ValidationError: Short password, or ``new_email`` equal to the current one
            NotFoundError: No live account has ``email``
            ConflictError: ``new_email`` belongs to another account
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(detail=PASSWORD_TOO_SHORT_DETAIL)
        email = email.strip().lower()
        target_email = new_email.strip().lower() if new_email else None

        user = await self.get_by_email(email)
        if user is None:
            raise NotFoundError("user", email, detail=f"No user found with email: {email}")
        if target_email == email:
            raise ValidationError(detail="The new email must be different from the current one.")
        if target_email and await self.get_by_email(target_email) is not None:
            raise ConflictError(detail=f"Email already in use: {target_email}")

        user.password_hash = await asyncio.to_thread(hash_password, new_password)
        if target_email:
            user.email = target_email
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("Password reset", extra={"user_id": user.id, "email_changed": bool(target_email)})
        return user
