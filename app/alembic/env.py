import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from dotenv import load_dotenv


# project root on PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

ENV_PATH = os.path.join(os.path.dirname(__file__), '..', 'config', 'settings.env')

# async driver -> sync driver used by migrations
SYNC_DRIVERS = {
    'mysql+asyncmy://': 'mysql+pymysql://',
    'sqlite+aiosqlite://': 'sqlite://',
}


def load_environment(env_path: str = ENV_PATH) -> None:
    """
    Read settings.env into the process environment (real env vars win)
    """
    load_dotenv(env_path, override=False)


def build_database_url() -> str:
    """
    DATABASE_URL when set, otherwise a MySQL URL from the DB_* variables
    """
    db_url = os.getenv('DATABASE_URL')
    if db_url:
        return to_sync_url(db_url)

    user = os.getenv('DB_USER', 'tweeter')
    pw = os.getenv('DB_PASSWORD', 'tweeter_pw')
    host = os.getenv('DB_HOST', 'localhost')
    port = os.getenv('DB_PORT', '3306')
    name = os.getenv('DB_NAME', 'tweeter')
    return to_sync_url(f"mysql+asyncmy://{user}:{pw}@{host}:{port}/{name}?charset=utf8mb4")


def to_sync_url(url: str) -> str:
    for async_prefix, sync_prefix in SYNC_DRIVERS.items():
        if url.startswith(async_prefix):
            return url.replace(async_prefix, sync_prefix, 1)
    return url


load_environment()

alembic_cfg = context.config
if alembic_cfg.config_file_name:
    fileConfig(alembic_cfg.config_file_name)

alembic_cfg.set_main_option('sqlalchemy.url', build_database_url())

# metadata of every mapped table
from app.core.database import Base  # noqa: E402
import app.models.user      # noqa: E402
import app.models.tweet     # noqa: E402
import app.models.reply     # noqa: E402
import app.models.favorite  # noqa: E402
import app.models.follow    # noqa: E402

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Emit the migration as a SQL script
    """
    url = alembic_cfg.get_main_option('sqlalchemy.url')
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == 'sqlite',
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
