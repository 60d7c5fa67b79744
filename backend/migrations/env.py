# backend/migrations/env.py
"""
Environnement Alembic de l'API ICP Readiness.

L'application parle à Postgres via asyncpg ; Alembic tourne en synchrone
(psycopg2). L'URL est donc reprise de settings.DATABASE_URL, driver retiré.
Le chemin `backend/` est ajouté par `prepend_sys_path = .` (alembic.ini).
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from app.core.config import settings
from app.core.database import Base, sync_database_url
import app.shared.models  # noqa: F401  (enregistre les tables sur Base.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", sync_database_url(settings.DATABASE_URL))

# compare_type : détecte aussi les changements de type (enums tier / rôle)
MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type":    True,
}


def run_migrations_offline() -> None:
    """`alembic upgrade --sql` : émet le SQL sans ouvrir de connexion."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, **MIGRATION_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
