"""Unit tests for storage error translation."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from board.domain.error import (
    ConstraintViolation,
    ForeignKeyViolation,
    InternalError,
    UniqueViolation,
)
from board.persistence.errors import classify_integrity_error, translate_errors


class FakeDriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, FakeDriverError(message, sqlstate))


class TestClassifyIntegrityError:
    def test_sqlite_unique_message(self):
        error = classify_integrity_error(
            integrity_error("UNIQUE constraint failed: users.email"), "users"
        )

        assert isinstance(error, UniqueViolation)
        assert error.table == "users"
        assert error.mentions("email")
        assert not error.mentions("nickname")

    def test_postgres_unique_sqlstate(self):
        error = classify_integrity_error(
            integrity_error(
                'duplicate key value violates unique constraint "uq_users_nickname"',
                "23505",
            ),
            "users",
        )

        assert isinstance(error, UniqueViolation)
        assert error.mentions("nickname")

    def test_foreign_key_by_message(self):
        error = classify_integrity_error(
            integrity_error("FOREIGN KEY constraint failed"), "posts"
        )

        assert isinstance(error, ForeignKeyViolation)

    def test_foreign_key_by_sqlstate(self):
        error = classify_integrity_error(
            integrity_error('violates constraint "posts_category_id_fkey"', "23503"),
            "categories",
        )

        assert isinstance(error, ForeignKeyViolation)

    def test_other_integrity_errors_are_generic_violations(self):
        error = classify_integrity_error(
            integrity_error("CHECK constraint failed: ck_users_role"), "users"
        )

        assert type(error) is ConstraintViolation


class TestTranslateErrors:
    def test_integrity_error_becomes_domain_error_with_cause(self):
        original = integrity_error("UNIQUE constraint failed: tags.name")

        with pytest.raises(UniqueViolation) as exc_info:
            with translate_errors("tags"):
                raise original

        assert exc_info.value.__cause__ is original

    def test_driver_failure_becomes_internal_error(self):
        with pytest.raises(InternalError):
            with translate_errors("posts"):
                raise OperationalError("SELECT 1", {}, FakeDriverError("disk I/O error"))

    def test_domain_errors_pass_through(self):
        with pytest.raises(KeyError):
            with translate_errors("posts"):
                raise KeyError("not a storage error")
