from fastapi import HTTPException, status

# Класс для исключений, которые связаны с нашим приложением
class AppException(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = ""

    def __init__(self) -> None:
        super().__init__(status_code=self.status_code, detail=self.detail)

# Исключения для работы с пользователями
class UserAlreadyExistsException(AppException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Пользователь уже существует"

class UserIsNotPresentException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Пользователь не найден"

# Инфраструктурные ошибки
class InternalServerErrorException(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"


# Ошибки хеширования паролей. Не связаны с HTTP: как их показать клиенту,
# решает вызывающий код.
class PasswordHashException(Exception):
    """Базовое исключение модуля хеширования паролей."""
    pass

class EmptyInputException(PasswordHashException):
    """Пустой пароль или пустой сохраненный хеш."""
    pass

class RandomSourceUnavailableException(PasswordHashException):
    """Не удалось получить случайные байты из системного источника."""
    pass

class MalformedHashException(PasswordHashException):
    """Сохраненный хеш не соответствует формату algorithm:iterations:salt:digest."""
    pass

class UnsupportedAlgorithmException(PasswordHashException):
    """Алгоритм в сохраненном хеше не поддерживается."""
    pass
