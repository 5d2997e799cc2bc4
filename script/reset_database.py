#!/usr/bin/env python3
"""
Database Reset Script
Reset the cinema PostgreSQL database structure

Features:
1. Drop & Recreate Database - completely wipe the database
2. Run Alembic Migrations - create the latest schema (all named constraints included)

Notes:
- This script only resets database structure, it does not seed data
- To seed demo data, run `python script/seed_data.py`
"""

import asyncio
import subprocess
import time

from sqlalchemy import Connection, create_engine, text

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR


DB_WAIT_SECONDS = 1


def _parse_db_connection(sync_url: str) -> tuple[str, str]:
    """Split a database URL into (server_url, db_name)"""
    db_name = sync_url.split('/')[-1]
    server_url = sync_url.rsplit('/', 1)[0]
    return server_url, db_name


def _terminate_connections(conn: Connection, db_name: str) -> None:
    conn.execute(
        text(
            'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
            'WHERE datname = :db_name AND pid <> pg_backend_pid()'
        ),
        {'db_name': db_name},
    )


def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')

    try:
        with admin_engine.connect() as conn:
            _terminate_connections(conn, db_name)

            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")

            time.sleep(DB_WAIT_SECONDS)

            conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        admin_engine.dispose()


def _run_alembic_migrations() -> None:
    print("   🔄 Running 'alembic upgrade head'...")

    result = subprocess.run(
        ['alembic', 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
    )

    if result.returncode != 0:
        print(f'   ❌ Migration failed (return code: {result.returncode})')
        if result.stdout:
            print(f'   📋 STDOUT: {result.stdout}')
        if result.stderr:
            print(f'   📋 STDERR: {result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    print('   ✅ Database migrations completed')


async def drop_and_recreate_database() -> None:
    sync_url = settings.DATABASE_URL_SYNC
    if not sync_url.startswith('postgresql'):
        raise RuntimeError(f'Reset only supports PostgreSQL, got {sync_url}')

    server_url, db_name = _parse_db_connection(sync_url)
    print(f'Server URL: {server_url}')
    print(f'Database name: {db_name}')

    print('🗑️ Dropping database...')
    _drop_and_create_db(server_url, db_name)

    print('🏗️ Running database migrations...')
    _run_alembic_migrations()


async def main() -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        await drop_and_recreate_database()
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed demo data, run: python script/seed_data.py')


if __name__ == '__main__':
    asyncio.run(main())
