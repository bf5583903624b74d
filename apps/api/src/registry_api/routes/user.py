"""User API routes."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from registry_api.models.errors import ValidationProblem
from registry_api.services import get_user_service
from registry_common.models.user import User, UserIn
from registry_common.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    redirect_slashes=False,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationProblem},
        status.HTTP_401_UNAUTHORIZED: {"description": "Missing access flag"},
    },
)

USER_NOT_FOUND = "User not found."


@router.get("", response_model=list[User])
@router.get("/", response_model=list[User])
async def list_users(service: UserService = Depends(get_user_service)) -> list[User]:
    return service.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> User:
    user = service.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
async def add_user(
    payload: UserIn,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> User:
    user = service.create_user(payload)
    response.headers["Location"] = f"{router.prefix}/{user.id}"
    return user


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user_id: int,
    payload: UserIn,
    service: UserService = Depends(get_user_service),
):
    if service.update_user(user_id, payload) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return None


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    if not service.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return None
