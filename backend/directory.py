import logging
import re
from datetime import datetime

from backend.core import config
from backend.core.errors import MissingFieldsError, REQUIRED_USER_FIELDS, UserConflictError, UserNotFoundError
from backend.models.user import User, utc_now

logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)', re.ASCII)

SEED_USERS = (
    {'name': 'John Doe', 'username': 'johndoe', 'email': 'john@example.com', 'image': 'john.jpg', 'role': 'admin'},
    {'name': 'Jane Smith', 'username': 'janesmith', 'email': 'jane@example.com', 'image': 'jane.jpg', 'role': 'user'},
    {'name': 'Robert Brown', 'username': 'robbrown', 'email': 'robert@example.com', 'image': 'robert.jpg', 'role': 'user'},
)
SEED_PASSWORD = 'password123'


def normalize_user_id(raw_id: int | str) -> int | None:
    """Parse a path parameter into a record id.

    Integral values match regardless of representation, so ``2``, ``"2"``,
    ``" 02 "`` and ``"2.0"`` all normalize to ``2``. Only plain ASCII decimal
    notation is accepted; anything else (``"0_1"``, non-ASCII digits,
    ``"2.5"``) returns ``None`` and matches no record.
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id

    value = str(raw_id).strip()
    if not USER_ID_PATTERN.fullmatch(value):
        return None

    integral, _, fraction = value.partition('.')
    if fraction.strip('0'):
        return None
    if integral in ('', '+', '-'):
        return 0
    return int(integral)


class UserDirectory:
    """In-memory registry of users.

    The collection is only mutated through ``create_user``, ``update_user`` and
    ``delete_user``. Ids are assigned as ``len(users) + 1`` at creation time, so an
    id freed by a deletion can be handed out again.
    """

    def __init__(self, users: list[User] | None = None) -> None:
        self._users: list[User] = list(users or [])

    def __len__(self) -> int:
        return len(self._users)

    def list_users(self) -> tuple[int, list[User]]:
        return len(self._users), list(self._users)

    def get_user(self, user_id: int | str) -> User:
        normalized_id = normalize_user_id(user_id)
        user = next((u for u in self._users if u.id == normalized_id), None) if normalized_id is not None else None
        if user is None:
            raise UserNotFoundError()
        return user

    def create_user(self, fields: dict) -> User:
        if any(not fields.get(field_name) for field_name in REQUIRED_USER_FIELDS):
            raise MissingFieldsError()

        username = fields['username']
        email = fields['email']
        if any(u.username == username or u.email == email for u in self._users):
            raise UserConflictError()

        user = User(
            id=len(self._users) + 1,
            name=fields['name'],
            username=username,
            email=email,
            password=fields['password'],
            updated_at=utc_now(),
            image=fields.get('image') or config.DEFAULT_USER_IMAGE,
            role=fields.get('role') or config.DEFAULT_USER_ROLE,
        )
        self._users.append(user)
        logger.info('Created user id=%s username=%s', user.id, user.username)
        return user

    def update_user(self, user_id: int | str, fields: dict) -> User:
        user = self.get_user(user_id)
        user.update_profile(fields)
        logger.info('Updated user id=%s', user.id)
        return user

    def delete_user(self, user_id: int | str) -> None:
        normalized_id = normalize_user_id(user_id)
        initial_length = len(self._users)
        self._users = [u for u in self._users if normalized_id is None or u.id != normalized_id]

        if len(self._users) == initial_length:
            raise UserNotFoundError()

        logger.info('Deleted %s user(s) with id=%s', initial_length - len(self._users), normalized_id)


def create_seeded_directory(now: datetime | None = None) -> UserDirectory:
    seeded_at = now or utc_now()
    users = [
        User(id=index, password=SEED_PASSWORD, updated_at=seeded_at, **seed)
        for index, seed in enumerate(SEED_USERS, start=1)
    ]
    return UserDirectory(users)
