import asyncio
import inspect
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from backend.core.errors import MissingFieldsError, UnexpectedFaultError, UserConflictError, UserNotFoundError
from backend.directory import create_seeded_directory
from backend.routes.user_routes import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    create_user,
    delete_user,
    get_directory,
    get_user,
    list_users,
    update_user,
)


@pytest.fixture
def directory():
    return create_seeded_directory()


class _BrokenDirectory:
    def create_user(self, fields):
        raise RuntimeError('disk on fire')

    def update_user(self, user_id, fields):
        raise KeyError('updated_at')


def test_get_directory_reads_application_state(directory) -> None:
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(user_directory=directory)))

    assert get_directory(request) is directory


def test_user_response_whitelists_public_fields(directory) -> None:
    payload = UserResponse.model_validate(directory.get_user(1)).model_dump(by_alias=True)

    assert set(payload) == {'id', 'name', 'username', 'email', 'updatedAt', 'image', 'role'}
    assert 'password' not in payload


def test_list_users_returns_total_and_users(directory) -> None:
    response = asyncio.run(list_users(directory=directory))

    assert response['total'] == 3
    assert [user.id for user in response['users']] == [1, 2, 3]


def test_get_user_raises_not_found(directory) -> None:
    with pytest.raises(UserNotFoundError):
        asyncio.run(get_user(user_id='404', directory=directory))


def test_create_user_stores_request_fields(directory) -> None:
    request = CreateUserRequest(name='A', username='a', email='a@x.com', password='p', role='admin')

    user = asyncio.run(create_user(data=request, directory=directory))

    assert user.id == 4
    assert user.role == 'admin'
    assert user.image == 'default.jpg'


def test_create_user_without_body_reports_missing_fields(directory) -> None:
    with pytest.raises(MissingFieldsError):
        asyncio.run(create_user(data=None, directory=directory))


def test_create_user_propagates_conflicts(directory) -> None:
    request = CreateUserRequest(name='A', username='johndoe', email='a@x.com', password='p')

    with pytest.raises(UserConflictError):
        asyncio.run(create_user(data=request, directory=directory))


def test_create_user_wraps_unexpected_errors() -> None:
    request = CreateUserRequest(name='A', username='a', email='a@x.com', password='p')

    with pytest.raises(UnexpectedFaultError) as exception_info:
        asyncio.run(create_user(data=request, directory=_BrokenDirectory()))

    assert exception_info.value.status_code == 500
    assert exception_info.value.to_payload() == {'message': 'Error creating user', 'error': 'disk on fire'}


def test_update_user_applies_partial_fields(directory) -> None:
    user = asyncio.run(update_user(user_id='3', data=UpdateUserRequest(image='new.jpg'), directory=directory))

    assert user.image == 'new.jpg'
    assert user.name == 'Robert Brown'


def test_update_user_wraps_unexpected_errors() -> None:
    with pytest.raises(UnexpectedFaultError) as exception_info:
        asyncio.run(update_user(user_id='1', data=None, directory=_BrokenDirectory()))

    assert exception_info.value.to_payload()['message'] == 'Error updating user'


def test_delete_user_removes_user(directory) -> None:
    assert asyncio.run(delete_user(user_id='3', directory=directory)) is None

    with pytest.raises(UserNotFoundError):
        asyncio.run(get_user(user_id='3', directory=directory))


@pytest.mark.parametrize('endpoint', [list_users, get_user, create_user, update_user, delete_user])
def test_endpoints_run_on_the_event_loop(endpoint) -> None:
    assert inspect.iscoroutinefunction(endpoint)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (123, '123'),
        (4.0, '4'),
        (1.5, '1.5'),
        (True, 'true'),
        (0, None),
        (False, None),
        (None, None),
        ('text', 'text'),
    ],
)
def test_request_fields_coerce_json_scalars(value, expected) -> None:
    assert CreateUserRequest(name=value).name == expected
    assert UpdateUserRequest(image=value).image == expected


def test_request_fields_reject_nested_values() -> None:
    with pytest.raises(ValidationError):
        CreateUserRequest(name={'first': 'A'})
