import functools
import logging
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

def transactional(func: F) -> F:
    """
    Декоратор для методов сервисов с атрибутом self.session.

    Фиксирует транзакцию при успешном выполнении метода и откатывает её
    при любом исключении (исключение пробрасывается дальше).
    """

    @functools.wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            result = func(self, *args, **kwargs)
            self.session.commit()
            return result
        except Exception as e:
            self.session.rollback()
            logger.error(f"Ошибка в транзакции ({func.__name__}): {e}")
            raise

    return cast(F, wrapper)
