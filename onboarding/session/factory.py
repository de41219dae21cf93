from onboarding.config.settings import Settings
from onboarding.database.connection import init_pool
from onboarding.database.session_repository import PostgresSessionRepository
from onboarding.session.repository import BaseSessionRepository, InMemorySessionRepository


class SessionRepositoryFactory:
    """Creates the session store configured by ``session_store``."""

    STORES = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseSessionRepository:
        store = settings.session_store.lower()
        if store == "memory":
            return InMemorySessionRepository()
        if store == "postgres":
            init_pool(settings)
            repository = PostgresSessionRepository()
            repository.ensure_schema()
            return repository
        raise ValueError(f"Unknown session store '{store}'. Choose from: {list(cls.STORES)}")
