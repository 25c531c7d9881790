"""Schema management for SQL-backed providers of the ordering domain."""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [
        provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS
    ]


def setup_db(domain: Domain) -> int:
    """Create tables for every aggregate and entity on a SQL provider.

    Returns the number of providers whose schema was created. Memory-backed
    domains have nothing to create.
    """
    created = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching the DAO registers the table on the provider's metadata
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            for _, entity_record in domain.registry.entities.items():
                if entity_record.cls.meta_.provider == provider.name:
                    domain.repository_for(entity_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            created += 1
    return created


def drop_db(domain: Domain) -> int:
    """Drop all tables on SQL providers. Returns the number of providers touched."""
    dropped = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            dropped += 1
    return dropped
