from app.services.user_service import UserService
