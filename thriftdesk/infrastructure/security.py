"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from thriftdesk.config import get_settings

settings = get_settings()

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=settings.password_hash_rounds,
)

ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify_password() -> None:
    """Spend the time of one verification without a stored hash."""

    pwd_context.dummy_verify()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def password_signature(password_hash: str, is_active: bool) -> str:
    """Fingerprint embedded in tokens so a password change or deactivation revokes them."""

    return sha256(f"{password_hash}:{int(is_active)}".encode()).hexdigest()


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "password_signature",
    "verify_password",
]
