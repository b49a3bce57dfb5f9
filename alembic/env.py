# alembic/env.py
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context
import asyncio
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Importing the package registers every model on its base
from academic_records.models import UsersBase, ProfilesBase, AcademicBase

config = context.config

# The ini section (alembic --name ...) decides which database is migrated
DATABASES = {
    'users': (UsersBase.metadata, 'USERS_DATABASE_URL'),
    'profiles': (ProfilesBase.metadata, 'PROFILES_DATABASE_URL'),
    'academic': (AcademicBase.metadata, 'ACADEMIC_DATABASE_URL'),
}

section = config.config_ini_section
if section not in DATABASES:
    raise RuntimeError(f"Unknown database section '{section}', use --name users|profiles|academic")

target_metadata, url_env = DATABASES[section]
config.set_main_option('sqlalchemy.url', os.getenv(url_env, config.get_main_option('sqlalchemy.url')))

if config.config_file_name:
    fileConfig(config.config_file_name)

def run_migrations_offline():
    url = config.get_main_option('sqlalchemy.url')
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'}
    )
    with context.begin_transaction():
        context.run_migrations()

def do_sync_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()

async def do_async_migrations(connection):
    await connection.run_sync(do_sync_migrations)

def run_migrations_online():
    connectable = create_async_engine(
        config.get_main_option('sqlalchemy.url'),
        poolclass=pool.NullPool,
    )

    async def run_async():
        async with connectable.connect() as connection:
            await do_async_migrations(connection)
        await connectable.dispose()

    asyncio.run(run_async())

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
