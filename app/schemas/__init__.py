from app.schemas.base_schema import SBase
from app.schemas.user_schemas import SUserCreate, SUser, SUserUpdate
