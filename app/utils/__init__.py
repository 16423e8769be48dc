from app.utils.exceptions import (
    AppException,
    InternalServerErrorException,
    UserAlreadyExistsException,
    UserIsNotPresentException,
    PasswordHashException,
    EmptyInputException,
    RandomSourceUnavailableException,
    MalformedHashException,
    UnsupportedAlgorithmException,
)
from app.utils.handlers import setup_exception_handlers
from app.utils.logger import setup_logging
from app.utils.decorators import transactional
