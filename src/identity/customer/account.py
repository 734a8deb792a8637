"""Customer account records."""

import hashlib

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """The signed-in customer as seen by the rest of the storefront."""

    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Account(User):
    """A registered account: the public profile plus a password digest."""

    password_digest: str

    def to_user(self) -> User:
        return User(**self.model_dump(exclude={"password_digest"}))

    def check_password(self, password: str) -> bool:
        return self.password_digest == digest_password(password)


def digest_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()
