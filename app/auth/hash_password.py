import base64
import binascii
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from enum import Enum

from app.config import settings
from app.utils.exceptions import (
    EmptyInputException,
    MalformedHashException,
    RandomSourceUnavailableException,
    UnsupportedAlgorithmException,
)

SALT_BYTES = 16
HASH_BYTES = 32
DEFAULT_ITERATIONS = 1_000_000
# Верхняя граница итераций: больше не принимает hashlib.pbkdf2_hmac (INT_MAX)
MAX_ITERATIONS = 2**31 - 1
DELIMITER = ":"


class PasswordAlgorithm(str, Enum):
    pbkdf2_sha256 = "pbkdf2-sha256"


def _b64encode(data: bytes) -> str:
    """Base64 без паддинга (алфавит не содержит разделителя ':')."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def _b64decode(value: str) -> bytes:
    if not value:
        raise MalformedHashException("Пустое поле в хеше")
    try:
        return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedHashException(f"Некорректный base64: {e}") from e


def _encode_password(password: str) -> bytes:
    # surrogatepass: строка с одиночными суррогатами кодируется детерминированно,
    # а не падает с UnicodeEncodeError
    return password.encode("utf-8", "surrogatepass")


def _derive_key(algorithm: PasswordAlgorithm, password: str, salt: bytes, iterations: int, length: int) -> bytes:
    if algorithm is PasswordAlgorithm.pbkdf2_sha256:
        return hashlib.pbkdf2_hmac("sha256", _encode_password(password), salt, iterations, dklen=length)
    raise UnsupportedAlgorithmException(algorithm.value)


@dataclass(frozen=True)
class EncodedHash:
    """Разобранное представление строки algorithm:iterations:salt:digest."""
    algorithm: PasswordAlgorithm
    iterations: int
    salt: bytes
    digest: bytes

    @classmethod
    def parse(cls, value: str) -> "EncodedHash":
        parts = value.split(DELIMITER)
        if len(parts) != 4:
            raise MalformedHashException(f"Ожидалось 4 поля, получено {len(parts)}")

        algorithm_str, iterations_str, salt_str, digest_str = parts

        try:
            algorithm = PasswordAlgorithm(algorithm_str)
        except ValueError:
            raise UnsupportedAlgorithmException(algorithm_str) from None

        # int() принимает пробелы, знак и '_', поэтому проверяем цифры явно
        if not (iterations_str.isascii() and iterations_str.isdigit()):
            raise MalformedHashException(f"Некорректное число итераций: {iterations_str!r}")
        iterations = int(iterations_str)
        if not 0 < iterations <= MAX_ITERATIONS:
            raise MalformedHashException(f"Число итераций вне диапазона 1..{MAX_ITERATIONS}: {iterations}")

        return cls(
            algorithm=algorithm,
            iterations=iterations,
            salt=_b64decode(salt_str),
            digest=_b64decode(digest_str),
        )

    def __str__(self) -> str:
        return DELIMITER.join([
            self.algorithm.value,
            str(self.iterations),
            _b64encode(self.salt),
            _b64encode(self.digest),
        ])


class HashPassword:
    """
    Хеширование паролей через PBKDF2-HMAC-SHA256.

    Экземпляр не хранит изменяемого состояния и может использоваться
    из нескольких потоков одновременно.
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS) -> None:
        if not 0 < iterations <= MAX_ITERATIONS:
            raise ValueError(f"iterations must be in 1..{MAX_ITERATIONS}")
        self.iterations = iterations

    def create_hash(self, password: str) -> str:
        """
        Создать хеш пароля со свежей случайной солью.

        Returns:
            Строка вида pbkdf2-sha256:<iterations>:<salt>:<digest>

        Raises:
            EmptyInputException: Если пароль пустой
            RandomSourceUnavailableException: Если системный источник случайности недоступен
        """
        if not password:
            raise EmptyInputException("Пароль не может быть пустым")

        try:
            salt = secrets.token_bytes(SALT_BYTES)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceUnavailableException(str(e)) from e

        algorithm = PasswordAlgorithm.pbkdf2_sha256
        digest = _derive_key(algorithm, password, salt, self.iterations, HASH_BYTES)
        return str(EncodedHash(algorithm, self.iterations, salt, digest))

    def verify_hash(self, password: str, hashed_password: str) -> bool:
        """
        Проверить пароль по сохраненному хешу.

        Параметры (алгоритм, итерации, соль) берутся из самого хеша, а не из
        настроек экземпляра, поэтому старые хеши остаются проверяемыми.

        Returns:
            True при совпадении, False если пароль неверный

        Raises:
            EmptyInputException: Если пароль или хеш пустые
            MalformedHashException: Если хеш поврежден
            UnsupportedAlgorithmException: Если алгоритм хеша не поддерживается
        """
        if not password or not hashed_password:
            raise EmptyInputException("Пароль и сохраненный хеш не могут быть пустыми")

        stored = EncodedHash.parse(hashed_password)
        candidate = _derive_key(stored.algorithm, password, stored.salt, stored.iterations, len(stored.digest))
        return hmac.compare_digest(candidate, stored.digest)


def get_hasher() -> HashPassword:
    return HashPassword(iterations=settings.password.ITERATIONS)


def encode(plaintext: str) -> str:
    return get_hasher().create_hash(plaintext)


def verify(plaintext: str, encoded_hash: str) -> bool:
    return get_hasher().verify_hash(plaintext, encoded_hash)
