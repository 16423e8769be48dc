import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from starlette.concurrency import run_in_threadpool

from app.routes.dependencies import get_user_service
from app.schemas.user_schemas import SUserCreate, SUser, SUserUpdate
from app.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

# Хеширование пароля занимает десятки-сотни миллисекунд CPU, поэтому
# методы, которые хешируют, выполняются в пуле потоков, а не в event loop.

@router.post(
    "",
    response_model=SUser,
    status_code=status.HTTP_201_CREATED,
    summary="Создание пользователя",
    description="Создает пользователя, хеширует пароль и сохраняет данные в базу.",
    response_description="Созданный пользователь (без хеша пароля)"
)
async def create_user(
    user_data: SUserCreate,
    user_service: UserService = Depends(get_user_service)
):
    user = await run_in_threadpool(user_service.create_user, user_data)
    logger.info(f"User registered successfully: {user.email}")
    return user

@router.get(
    "",
    response_model=List[SUser],
    summary="Список пользователей",
    description="Возвращает страницу пользователей, отсортированных по дате создания (новые первыми).",
)
async def list_users(
    limit: int = Query(10, ge=1, le=100, description="Размер страницы"),
    offset: int = Query(0, ge=0, description="Смещение"),
    user_service: UserService = Depends(get_user_service)
):
    return user_service.list_users(limit, offset)

@router.get(
    "/{user_id}",
    response_model=SUser,
    summary="Пользователь по ID",
    description="Возвращает данные пользователя по его идентификатору.",
)
async def get_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service)
):
    return user_service.get_user(user_id)

@router.patch(
    "/{user_id}",
    response_model=SUser,
    summary="Обновить пользователя",
    description="Частичное обновление. Если передан пароль, он хешируется заново; если не передан, хеш не меняется.",
)
async def update_user(
    user_id: int,
    user_update: SUserUpdate,
    user_service: UserService = Depends(get_user_service)
):
    return await run_in_threadpool(user_service.update_user, user_id, user_update)

@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить пользователя",
)
async def delete_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service)
):
    user_service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
