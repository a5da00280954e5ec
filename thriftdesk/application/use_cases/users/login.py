"""Use case checking staff credentials at login."""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from thriftdesk.domain.entities import User
from thriftdesk.infrastructure.repositories import UserRepository
from thriftdesk.infrastructure.security import dummy_verify_password, verify_password


class LoginOutcome(Enum):
    ACCEPTED = "accepted"
    BAD_CREDENTIALS = "bad_credentials"
    DEACTIVATED = "deactivated"


@dataclass(frozen=True)
class LoginAttempt:
    outcome: LoginOutcome
    user: User | None = None


def check_credentials(session: Session, *, username: str, password: str) -> LoginAttempt:
    """Match ``username`` and ``password`` against the active staff accounts.

    Unknown usernames still pay for one hash verification so response times
    do not reveal which accounts exist. A deactivated account is only reported
    as such once its password matched.
    """

    user = UserRepository(session).get_by_username(username)
    if user is None:
        dummy_verify_password()
        return LoginAttempt(LoginOutcome.BAD_CREDENTIALS)
    if not verify_password(password, user.password):
        return LoginAttempt(LoginOutcome.BAD_CREDENTIALS)
    if not user.is_active:
        return LoginAttempt(LoginOutcome.DEACTIVATED, user)
    return LoginAttempt(LoginOutcome.ACCEPTED, user)
