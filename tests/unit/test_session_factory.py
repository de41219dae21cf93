from unittest.mock import MagicMock, patch

import pytest

from onboarding.config.settings import Settings
from onboarding.session.factory import SessionRepositoryFactory
from onboarding.session.repository import InMemorySessionRepository


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


class TestSessionRepositoryFactory:
    def test_creates_memory_store(self) -> None:
        repo = SessionRepositoryFactory.create(_settings(session_store="memory"))
        assert isinstance(repo, InMemorySessionRepository)

    def test_store_name_is_case_insensitive(self) -> None:
        repo = SessionRepositoryFactory.create(_settings(session_store="Memory"))
        assert isinstance(repo, InMemorySessionRepository)

    @patch("onboarding.session.factory.PostgresSessionRepository")
    @patch("onboarding.session.factory.init_pool")
    def test_postgres_store_initializes_pool_and_schema(
        self, mock_init_pool: MagicMock, mock_repo_cls: MagicMock
    ) -> None:
        settings = _settings(session_store="postgres")

        repo = SessionRepositoryFactory.create(settings)

        mock_init_pool.assert_called_once_with(settings)
        mock_repo_cls.return_value.ensure_schema.assert_called_once()
        assert repo is mock_repo_cls.return_value

    def test_raises_for_unknown_store(self) -> None:
        with pytest.raises(ValueError, match="Unknown session store"):
            SessionRepositoryFactory.create(_settings(session_store="redis"))
