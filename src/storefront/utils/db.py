"""Schema management for SQL-backed providers.

The memory provider needs none of this. When a provider is configured for
sqlite or postgresql, touching each repository's DAO registers its table on
the provider's SQLAlchemy metadata, which is then created or dropped in one go.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _register_tables(domain: Domain, provider) -> None:
    for _, aggregate_record in domain.registry.aggregates.items():
        if aggregate_record.cls.meta_.provider == provider.name:
            domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

    for _, entity_record in domain.registry.entities.items():
        if entity_record.cls.meta_.provider == provider.name:
            domain.repository_for(entity_record.cls)._dao  # noqa: B018


def sql_providers(domain: Domain):
    return [p for p in domain.providers.values() if p.conn_info["provider"] in _SQL_PROVIDERS]


def setup_db(domain: Domain) -> int:
    """Create tables for every SQL provider. Returns how many providers were set up."""
    with domain.domain_context():
        providers = sql_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            _register_tables(domain, provider)
            provider._metadata.create_all(engine)
        return len(providers)


def drop_db(domain: Domain) -> int:
    with domain.domain_context():
        providers = sql_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
        return len(providers)
