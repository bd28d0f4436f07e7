import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [provider for provider in domain.providers.values() if provider.conn_info["provider"] in SQL_PROVIDERS]


def setup_db(domain: Domain) -> int:
    """Setup database schema. Returns the number of SQL providers touched."""
    with domain.domain_context():
        providers = _sql_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])

            # Tables are registered in the provider's metadata when each DAO is first built
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            for _, entity_record in domain.registry.entities.items():
                if entity_record.cls.meta_.provider == provider.name:
                    domain.repository_for(entity_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info("Database schema created", provider=provider.name)

    if not providers:
        logger.warning("No SQL database configured; nothing to create")
    return len(providers)


def drop_db(domain: Domain) -> int:
    """Drop database schema. Returns the number of SQL providers touched."""
    with domain.domain_context():
        providers = _sql_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", provider=provider.name)

    if not providers:
        logger.warning("No SQL database configured; nothing to drop")
    return len(providers)
