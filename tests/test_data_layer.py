"""Data layer tests.

Covers the user table and repository against an in-memory SQLite database:
- Entity <-> table persistence
- Repository create / get / update
- Email uniqueness and field rules enforced before persistence
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.sixcities.core.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserValidationError,
)
from src.sixcities.entities.user import User, UserRepository, UserTable, UserType


def make_user(salt: str, name: str = "Ann", email: str = "ann@example.com", **kwargs) -> User:
    user = User(name=name, email=email, user_type=kwargs.pop("user_type", UserType.REGULAR), **kwargs)
    user.set_password("secret1", salt)
    return user


class TestUserTable:
    """Test User database table operations."""

    def test_user_table_creation(self, session: Session):
        row = UserTable(
            id="test-id",
            name="Database",
            email="db.user@example.com",
            password="digest",
            user_type="regular",
        )

        session.add(row)
        session.commit()

        saved = session.get(UserTable, "test-id")
        assert saved is not None
        assert saved.name == "Database"
        assert saved.avatar_path == ""
        assert isinstance(saved.created_at, datetime)

    def test_email_is_unique_in_storage(self, session: Session):
        session.add(UserTable(name="A", email="same@example.com", password="d", user_type="regular"))
        session.commit()

        session.add(UserTable(name="B", email="same@example.com", password="d", user_type="pro"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_table_name(self):
        assert UserTable.__tablename__ == "users"


class TestUserRepository:
    """Test User repository operations."""

    @pytest.fixture
    def user_repo(self, session: Session) -> UserRepository:
        return UserRepository(session)

    def test_create_assigns_id_and_timestamps(self, user_repo: UserRepository, salt: str):
        user = make_user(salt)
        assert user.id is None

        created = user_repo.create(user)

        assert created.id is not None
        assert created.is_persisted
        assert created.name == "Ann"
        assert created.email == "ann@example.com"
        assert created.user_type is UserType.REGULAR
        assert created.created_at is not None
        assert created.updated_at is not None

    def test_create_keeps_only_the_digest(self, user_repo: UserRepository, session: Session, salt: str):
        created = user_repo.create(make_user(salt))

        row = session.get(UserTable, created.id)
        assert row is not None
        assert row.password != "secret1"
        assert row.password == created.get_password()
        assert created.verify_password("secret1", salt)

    def test_get_user_by_id(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))

        retrieved = user_repo.get(created.id)

        assert retrieved is not None
        assert retrieved == created
        assert retrieved.verify_password("secret1", salt)

    def test_get_nonexistent_user(self, user_repo: UserRepository):
        assert user_repo.get("nonexistent-id") is None

    def test_get_by_email(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))

        assert user_repo.get_by_email("ann@example.com") == created
        assert user_repo.get_by_email("  ann@example.com ") == created
        assert user_repo.get_by_email("missing@example.com") is None

    def test_exists(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))

        assert user_repo.exists(created.id) is True
        assert user_repo.exists("nope") is False

    def test_duplicate_email_rejected(self, user_repo: UserRepository, salt: str):
        user_repo.create(make_user(salt))

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            user_repo.create(make_user(salt, name="Other"))

        assert exc_info.value.email == "ann@example.com"

    def test_duplicate_email_after_trim_rejected(self, user_repo: UserRepository, salt: str):
        user_repo.create(make_user(salt))

        with pytest.raises(UserAlreadyExistsError):
            user_repo.create(make_user(salt, email="  ann@example.com  "))

    def test_create_without_password_rejected(self, user_repo: UserRepository):
        user = User(name="Ann", email="ann@example.com", user_type=UserType.REGULAR)

        with pytest.raises(UserValidationError) as exc_info:
            user_repo.create(user)

        assert exc_info.value.fields == {"password"}

    def test_create_with_invalid_fields_rejected(self, user_repo: UserRepository, salt: str):
        user = make_user(salt, name="A" * 16, email="not-an-email")

        with pytest.raises(UserValidationError) as exc_info:
            user_repo.create(user)

        assert exc_info.value.fields == {"name", "email"}
        assert user_repo.get_by_email("not-an-email") is None

    def test_update_user(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))
        created.name = "Annie"
        created.avatar_path = "/img/annie.png"
        created.user_type = UserType.PRO

        updated = user_repo.update(created)

        assert updated.name == "Annie"
        assert updated.avatar_path == "/img/annie.png"
        assert updated.is_pro

        retrieved = user_repo.get(created.id)
        assert retrieved is not None
        assert retrieved.name == "Annie"
        assert retrieved.user_type is UserType.PRO

    def test_update_moves_updated_at_forward(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))
        created.name = "Annie"

        updated = user_repo.update(created)

        assert updated.updated_at >= created.updated_at
        assert updated.created_at == created.created_at

    def test_update_password(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))
        created.set_password("newpass1", salt)

        user_repo.update(created)

        retrieved = user_repo.get(created.id)
        assert retrieved is not None
        assert retrieved.verify_password("newpass1", salt)
        assert not retrieved.verify_password("secret1", salt)

    def test_update_unknown_user(self, user_repo: UserRepository, salt: str):
        user = make_user(salt, id="missing")

        with pytest.raises(UserNotFoundError):
            user_repo.update(user)

    def test_update_unsaved_user(self, user_repo: UserRepository, salt: str):
        with pytest.raises(UserNotFoundError):
            user_repo.update(make_user(salt))

    def test_update_to_taken_email_rejected(self, user_repo: UserRepository, salt: str):
        user_repo.create(make_user(salt))
        other = user_repo.create(make_user(salt, name="Bob", email="bob@example.com"))
        other.email = "ann@example.com"

        with pytest.raises(UserAlreadyExistsError):
            user_repo.update(other)

    def test_update_keeps_own_email(self, user_repo: UserRepository, salt: str):
        created = user_repo.create(make_user(salt))
        created.name = "Annie"

        assert user_repo.update(created).email == "ann@example.com"

    def test_stored_rows_are_queryable(self, user_repo: UserRepository, session: Session, salt: str):
        user_repo.create(make_user(salt))
        user_repo.create(make_user(salt, name="Pat", email="pat@example.com", user_type=UserType.PRO))

        pros = session.exec(select(UserTable).where(UserTable.user_type == "pro")).all()

        assert [row.email for row in pros] == ["pat@example.com"]

    def test_failed_create_keeps_pending_work(self, user_repo: UserRepository, session: Session, salt: str):
        ann = user_repo.create(make_user(salt))
        bob = user_repo.create(make_user(salt, name="Bob", email="bob@example.com"))

        with pytest.raises(IntegrityError):
            user_repo.create(make_user(salt, name="Cat", email="cat@example.com", id=bob.id))

        assert user_repo.get_by_email("ann@example.com") == ann
        assert user_repo.get_by_email("bob@example.com") == bob
        assert user_repo.get_by_email("cat@example.com") is None

    def test_id_clash_is_not_reported_as_taken_email(self, user_repo: UserRepository, salt: str):
        bob = user_repo.create(make_user(salt, name="Bob", email="bob@example.com"))

        with pytest.raises(IntegrityError) as exc_info:
            user_repo.create(make_user(salt, name="Cat", email="cat@example.com", id=bob.id))

        assert not isinstance(exc_info.value, UserAlreadyExistsError)

    def test_email_index_violation_becomes_already_exists(
        self, user_repo: UserRepository, session: Session, salt: str, monkeypatch: pytest.MonkeyPatch
    ):
        ann = user_repo.create(make_user(salt))
        # Another writer got there between the lookup and the insert
        monkeypatch.setattr(user_repo, "_get_row_by_email", lambda email: None)

        with pytest.raises(UserAlreadyExistsError):
            user_repo.create(make_user(salt, name="Twin"))

        monkeypatch.undo()
        assert user_repo.get(ann.id) == ann
        assert len(session.exec(select(UserTable)).all()) == 1

    def test_session_still_commits_after_failed_create(self, user_repo: UserRepository, session: Session, salt: str):
        ann = user_repo.create(make_user(salt))
        with pytest.raises(IntegrityError):
            user_repo.create(make_user(salt, name="Cat", email="cat@example.com", id=ann.id))

        session.commit()
        session.expire_all()

        assert user_repo.get(ann.id) == ann

    def test_reloaded_timestamps_compare_with_in_memory_ones(
        self, user_repo: UserRepository, session: Session, salt: str
    ):
        created = user_repo.create(make_user(salt))
        session.commit()
        session.expire_all()

        reloaded = user_repo.get(created.id)

        assert reloaded is not None
        assert reloaded.updated_at.tzinfo is not None
        assert reloaded.created_at == created.created_at
        assert reloaded.updated_at >= created.updated_at
