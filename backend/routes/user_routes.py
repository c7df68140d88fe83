import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field, field_validator

from backend.core.errors import UnexpectedFaultError, UserDirectoryError
from backend.directory import UserDirectory

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


class UserFieldsRequest(BaseModel):
    @field_validator('*', mode='before')
    @classmethod
    def coerce_scalar(cls, value):
        if value is None or isinstance(value, str):
            return value

        if isinstance(value, (bool, int, float)):
            # Falsy scalars count as absent, like an empty string.
            if not value:
                return None
            if isinstance(value, bool):
                return 'true'
            if isinstance(value, float) and value.is_integer():
                return str(int(value))
            return str(value)

        raise ValueError('Expected a string value.')


class CreateUserRequest(UserFieldsRequest):
    name: str | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None
    image: str | None = None
    role: str | None = None


class UpdateUserRequest(UserFieldsRequest):
    name: str | None = None
    username: str | None = None
    email: str | None = None
    image: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    username: str
    email: str
    updated_at: datetime = Field(serialization_alias='updatedAt')
    image: str
    role: str

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    total: int
    users: list[UserResponse]


def get_directory(request: Request) -> UserDirectory:
    return request.app.state.user_directory


@router.get('', response_model=UserListResponse)
async def list_users(directory: UserDirectory = Depends(get_directory)):
    total, users = directory.list_users()
    return {'total': total, 'users': users}


@router.get('/{user_id}', response_model=UserResponse)
async def get_user(user_id: str, directory: UserDirectory = Depends(get_directory)):
    return directory.get_user(user_id)


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: CreateUserRequest | None = None, directory: UserDirectory = Depends(get_directory)):
    fields = data.model_dump() if data is not None else {}

    try:
        user = directory.create_user(fields)
    except UserDirectoryError:
        raise
    except Exception as exc:
        logger.exception('Error creating user')
        raise UnexpectedFaultError('Error creating user', str(exc)) from exc

    return user


@router.put('/{user_id}', response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UpdateUserRequest | None = None,
    directory: UserDirectory = Depends(get_directory),
):
    fields = data.model_dump(exclude_none=True) if data is not None else {}

    try:
        user = directory.update_user(user_id, fields)
    except UserDirectoryError:
        raise
    except Exception as exc:
        logger.exception('Error updating user %s', user_id)
        raise UnexpectedFaultError('Error updating user', str(exc)) from exc

    return user


@router.delete('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, directory: UserDirectory = Depends(get_directory)):
    directory.delete_user(user_id)
