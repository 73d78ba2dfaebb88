"""Per-invocation state shared by every command: database access and fake-data generator."""

from faker import Faker

from seeder.core.config import settings
from seeder.db.base import create_db_engine, make_session_factory, session_scope


class SeedContext:
    def __init__(
        self,
        database_url: str | None = None,
        faker_seed: int | None = None,
        locale: str | None = None,
    ):
        self.engine = create_db_engine(database_url)
        self.session_factory = make_session_factory(self.engine)
        self.faker = Faker(locale or settings.FAKER_LOCALE)
        if faker_seed is not None:
            self.faker.seed_instance(faker_seed)

    @property
    def random(self):
        """The faker's ``random.Random``, seeded together with the faker."""
        return self.faker.random

    def session(self):
        return session_scope(self.session_factory)

    def close(self) -> None:
        self.engine.dispose()
