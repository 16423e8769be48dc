from app.models.base_model import Base
from app.models.user_model import User
