"""Role and account management on top of the ``Role``/``User`` models.

Account creation never raises for validation problems.  Instead every
problem found is collected into an :class:`IdentityResult` so callers can
log or display all of them at once.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from models import Role, User, db

USERNAME_RE = re.compile(r'^[A-Za-z0-9\-._@+]+$')
EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class RoleNotFoundError(LookupError):
    """Raised when assigning a role that was never created."""


@dataclass(frozen=True)
class IdentityError:
    code: str
    description: str


@dataclass
class IdentityResult:
    succeeded: bool
    errors: list[IdentityError] = field(default_factory=list)

    @classmethod
    def success(cls) -> 'IdentityResult':
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> 'IdentityResult':
        return cls(succeeded=False, errors=list(errors))

    def describe(self) -> str:
        return ', '.join(e.description for e in self.errors)


@dataclass
class PasswordPolicy:
    min_length: int = 6
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = True

    @classmethod
    def from_config(cls, config) -> 'PasswordPolicy':
        return cls(
            min_length=int(config.get('PASSWORD_MIN_LENGTH', 6)),
            require_digit=bool(config.get('PASSWORD_REQUIRE_DIGIT', True)),
            require_lowercase=bool(config.get('PASSWORD_REQUIRE_LOWERCASE', True)),
            require_uppercase=bool(config.get('PASSWORD_REQUIRE_UPPERCASE', True)),
            require_non_alphanumeric=bool(config.get('PASSWORD_REQUIRE_NON_ALPHANUMERIC', True)),
        )

    def validate(self, password: str | None) -> list[IdentityError]:
        password = password or ''
        errors = []
        if len(password) < self.min_length:
            errors.append(IdentityError(
                'PasswordTooShort',
                f'Passwords must be at least {self.min_length} characters.',
            ))
        if self.require_non_alphanumeric and all(c in string.ascii_letters or c in string.digits for c in password):
            errors.append(IdentityError(
                'PasswordRequiresNonAlphanumeric',
                'Passwords must have at least one non alphanumeric character.',
            ))
        if self.require_digit and not any(c in string.digits for c in password):
            errors.append(IdentityError('PasswordRequiresDigit', "Passwords must have at least one digit ('0'-'9')."))
        if self.require_lowercase and not any(c in string.ascii_lowercase for c in password):
            errors.append(IdentityError('PasswordRequiresLower', "Passwords must have at least one lowercase ('a'-'z')."))
        if self.require_uppercase and not any(c in string.ascii_uppercase for c in password):
            errors.append(IdentityError('PasswordRequiresUpper', "Passwords must have at least one uppercase ('A'-'Z')."))
        return errors


def _find_role(name: str) -> Role | None:
    return Role.query.filter(func.lower(Role.name) == (name or '').strip().lower()).first()


class RoleService:
    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def role_exists(self, name: str) -> bool:
        return _find_role(name) is not None

    def create_role(self, name: str) -> IdentityResult:
        if self.role_exists(name):
            return IdentityResult.failed(IdentityError('DuplicateRoleName', f"Role name '{name}' is already taken."))
        self.session.add(Role(name=name))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return IdentityResult.failed(IdentityError('DuplicateRoleName', f"Role name '{name}' is already taken."))
        return IdentityResult.success()


class AccountService:
    def __init__(self, policy: PasswordPolicy | None = None, session=None):
        self.policy = policy or PasswordPolicy()
        self.session = session if session is not None else db.session

    def find_by_email(self, email: str) -> User | None:
        email = (email or '').strip().lower()
        if not email:
            return None
        return User.query.filter(func.lower(User.email) == email).first()

    def find_by_username(self, username: str) -> User | None:
        username = (username or '').strip().lower()
        if not username:
            return None
        return User.query.filter(func.lower(User.username) == username).first()

    def _validate_user(self, user: User) -> list[IdentityError]:
        errors = []
        username = (user.username or '').strip()
        if not username or not USERNAME_RE.match(username):
            errors.append(IdentityError('InvalidUserName', f"Username '{username}' is invalid, can only contain letters or digits."))
        elif self.find_by_username(username):
            errors.append(IdentityError('DuplicateUserName', f"Username '{username}' is already taken."))

        email = (user.email or '').strip()
        if not email or not EMAIL_RE.match(email):
            errors.append(IdentityError('InvalidEmail', f"Email '{email}' is invalid."))
        elif self.find_by_email(email):
            errors.append(IdentityError('DuplicateEmail', f"Email '{email}' is already taken."))
        return errors

    def create_account(self, user: User, password: str) -> IdentityResult:
        """Validate ``user`` and ``password`` and persist the account."""
        errors = self._validate_user(user) + self.policy.validate(password)
        if errors:
            return IdentityResult.failed(*errors)

        user.username = user.username.strip()
        user.email = user.email.strip()
        user.set_password(password)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Another process created the same account between validation and commit.
            self.session.rollback()
            return IdentityResult.failed(IdentityError('DuplicateEmail', f"Email '{user.email}' is already taken."))
        return IdentityResult.success()

    def add_to_role(self, user: User, role_name: str) -> IdentityResult:
        role = _find_role(role_name)
        if role is None:
            raise RoleNotFoundError(f"Role {role_name} does not exist.")
        if role in user.roles:
            return IdentityResult.failed(IdentityError('UserAlreadyInRole', f"User already in role '{role.name}'."))
        user.roles.append(role)
        self.session.commit()
        return IdentityResult.success()
