from loguru import logger
from sqlmodel import Session

from src.sixcities.core.exceptions import UserValidationError
from src.sixcities.entities.user.dto import CreateUserDTO, LoginUserDTO, UpdateUserDTO
from src.sixcities.entities.user.entity import User
from src.sixcities.entities.user.rdo import UserRDO
from src.sixcities.entities.user.repository import UserRepository
from src.sixcities.entities.user.validation import validate_password
from src.sixcities.runtime.context import get_config


class UserService:
    """Creates, looks up, updates and authenticates users.

    Commits are left to the caller; the service only goes through the
    repository, which flushes.
    """

    def __init__(self, db_session: Session, salt: str | None = None):
        self._user_repo = UserRepository(db_session)
        self._salt = salt

    @property
    def salt(self) -> str:
        return self._salt if self._salt is not None else get_config().security.password_salt

    def create(self, dto: CreateUserDTO) -> User:
        """Create and persist a user from a creation request.

        The plaintext password is length-checked before hashing; the stored
        field only ever sees the digest.

        Raises:
            UserValidationError: if the password or a stored field breaks a rule
            UserAlreadyExistsError: if the email is taken
        """
        issues = validate_password(dto.password)
        if issues:
            raise UserValidationError(issues)

        user = User.from_dto(dto)
        user.avatar_path = dto.avatar_path
        user.set_password(dto.password, self.salt)

        created = self._user_repo.create(user)
        logger.info("New user created: {}", created.email)
        return created

    def find_by_id(self, user_id: str) -> User | None:
        return self._user_repo.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        return self._user_repo.get_by_email(email)

    def exists(self, user_id: str) -> bool:
        return self._user_repo.exists(user_id)

    def find_or_create(self, dto: CreateUserDTO) -> User:
        existing = self.find_by_email(dto.email)
        if existing is not None:
            return existing
        return self.create(dto)

    def update_by_id(self, user_id: str, dto: UpdateUserDTO) -> User | None:
        """Apply the fields set on ``dto``; returns None for unknown ids."""
        user = self._user_repo.get(user_id)
        if user is None:
            return None

        for field, value in dto.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value)

        updated = self._user_repo.update(user)
        logger.info("User {} updated", user_id)
        return updated

    def change_password(self, user_id: str, password: str) -> User | None:
        issues = validate_password(password)
        if issues:
            raise UserValidationError(issues)

        user = self._user_repo.get(user_id)
        if user is None:
            return None
        user.set_password(password, self.salt)
        return self._user_repo.update(user)

    def verify_credentials(self, dto: LoginUserDTO) -> User | None:
        """Return the user when email and password match, otherwise None."""
        user = self.find_by_email(dto.email)
        if user is None:
            logger.info("Login attempt for unknown email {}", dto.email)
            return None
        if not user.verify_password(dto.password, self.salt):
            logger.warning("Incorrect password for {}", dto.email)
            return None
        return user

    @staticmethod
    def to_rdo(user: User, is_pro: bool | None = None) -> UserRDO:
        """Project ``user`` for a response.

        ``is_pro`` defaults to the user's role; pass it explicitly when the
        flag comes from somewhere else, such as a subscription check.
        """
        if is_pro is None:
            return UserRDO.fill(user)
        return UserRDO.fill(user, is_pro=is_pro)
