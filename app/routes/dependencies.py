from fastapi import Depends
from sqlalchemy.orm import Session

from app.database.database import get_session
from app.services import UserService


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)
