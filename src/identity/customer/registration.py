"""Customer registration, sign-in and sign-out.

Accounts are kept as one collection under the users key. The signed-in user
is stored separately under the session key and removed on sign-out.
"""

import time
from collections.abc import Callable

from pydantic import BaseModel, TypeAdapter

from identity.customer.account import Account, User, digest_password
from identity.domain import logger
from identity.shared.email import is_valid_email
from identity.shared.phone import DEFAULT_COUNTRY_CODE, is_valid_phone, normalize_phone
from shared.exceptions import ValidationError
from shared.kvstore.port import KVStore
from shared.records import load_collection, load_record, save_collection, save_record

USERS_KEY = "uzum-users"
SESSION_KEY = "uzum-user"
MIN_PASSWORD_LENGTH = 6

_ACCOUNTS = TypeAdapter(list[Account])
_USER = TypeAdapter(User)


class RegistrationForm(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirm_password: str = ""
    agree_to_terms: bool = False


def validate_registration(form: RegistrationForm, country_code: str = DEFAULT_COUNTRY_CODE) -> dict[str, list[str]]:
    """Return field errors for ``form``; an empty dict means it is valid."""
    errors: dict[str, list[str]] = {}

    if not form.first_name.strip():
        errors["first_name"] = ["Enter your first name"]
    if not form.last_name.strip():
        errors["last_name"] = ["Enter your last name"]

    if not form.email.strip():
        errors["email"] = ["Enter your email"]
    elif not is_valid_email(form.email.strip()):
        errors["email"] = ["Enter a valid email address"]

    if not form.phone.strip():
        errors["phone"] = ["Enter your phone number"]
    elif not is_valid_phone(form.phone, country_code):
        errors["phone"] = [f"Enter a valid phone number (+{country_code}XXXXXXXXX)"]

    if not form.password.strip():
        errors["password"] = ["Enter a password"]
    elif len(form.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]

    if not form.confirm_password.strip():
        errors["confirm_password"] = ["Confirm your password"]
    elif form.password != form.confirm_password:
        errors["confirm_password"] = ["Passwords do not match"]

    if not form.agree_to_terms:
        errors["agree_to_terms"] = ["You must accept the terms of use"]

    return errors


class AccountRegistry:
    def __init__(
        self,
        store: KVStore,
        *,
        users_key: str = USERS_KEY,
        session_key: str = SESSION_KEY,
        country_code: str = DEFAULT_COUNTRY_CODE,
        id_factory: Callable[[], str] | None = None,
    ):
        self.store = store
        self.users_key = users_key
        self.session_key = session_key
        self.country_code = country_code
        self._id_factory = id_factory or (lambda: str(time.time_ns() // 1_000_000))
        self._current_user: User | None = load_record(store, session_key, _USER)

    @property
    def current_user(self) -> User | None:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def accounts(self) -> tuple[Account, ...]:
        return tuple(load_collection(self.store, self.users_key, _ACCOUNTS))

    def register(self, form: RegistrationForm) -> User:
        """Create an account and sign it in.

        Raises ``ValidationError`` with field messages when the form is
        invalid, or with a ``general`` message when the email or phone is
        already registered.
        """
        form = form.model_copy(update={"phone": normalize_phone(form.phone, self.country_code)})
        errors = validate_registration(form, self.country_code)
        if errors:
            raise ValidationError(errors)

        email = form.email.strip()
        accounts = list(self.accounts())
        if any(a.email == email or a.phone == form.phone for a in accounts):
            logger.info("Registration rejected for existing account", email=email)
            raise ValidationError({"general": ["An account with this email or phone number already exists"]})

        account = Account(
            id=self._id_factory(),
            first_name=form.first_name.strip(),
            last_name=form.last_name.strip(),
            email=email,
            phone=form.phone,
            password_digest=digest_password(form.password),
        )
        accounts.append(account)
        save_collection(self.store, self.users_key, _ACCOUNTS, accounts)
        logger.info("Customer registered", user_id=account.id)

        return self._sign_in(account.to_user())

    def login(self, email_or_phone: str, password: str) -> User | None:
        """Sign in by email or phone. Returns None when the credentials do not match."""
        identifier = email_or_phone.strip()
        candidates = {identifier}
        if "@" not in identifier:
            candidates.add(normalize_phone(identifier, self.country_code))

        account = next(
            (
                a
                for a in self.accounts()
                if (a.email in candidates or a.phone in candidates) and a.check_password(password)
            ),
            None,
        )
        if account is None:
            logger.info("Login failed", identifier=identifier)
            return None
        return self._sign_in(account.to_user())

    def logout(self) -> None:
        self._current_user = None
        self.store.remove(self.session_key)

    def _sign_in(self, user: User) -> User:
        self._current_user = user
        save_record(self.store, self.session_key, _USER, user)
        logger.info("Customer signed in", user_id=user.id)
        return user
