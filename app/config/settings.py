# app/config/settings.py
# Application configuration read from the environment

import os
from typing import Dict, List
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class AppConfig:
    """Runtime configuration for the goal tracker backend"""

    DATABASE = {
        'url': os.getenv('DATABASE_URL', 'sqlite:///./goal_tracker.db'),
        # PostgreSQL on Render or similar needs sslmode=require
        'sslmode': os.getenv('DB_SSLMODE'),
        'echo': os.getenv('DB_ECHO', 'false').lower() == 'true',
        'auto_create_tables': os.getenv('AUTO_CREATE_TABLES', 'true').lower() == 'true',
    }

    AUTH = {
        'secret_key': os.getenv('SECRET_KEY', 'dev-secret-change-me'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'access_token_expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24)),
    }

    CORS = {
        'origins': _split_csv(os.getenv(
            'CORS_ORIGINS',
            'http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000',
        )),
    }

    SERVER = {
        'host': os.getenv('HOST', '0.0.0.0'),
        'port': int(os.getenv('PORT', 8000)),
        'reload': os.getenv('RELOAD', 'true').lower() == 'true',
    }

    LOGGING = {
        'level': os.getenv('LOG_LEVEL', 'INFO').upper(),
    }

    TIME_LOGS = {
        'page_size': int(os.getenv('TIME_LOG_PAGE_SIZE', 20)),
        'max_page_size': int(os.getenv('TIME_LOG_MAX_PAGE_SIZE', 100)),
        'default_period': os.getenv('TIME_STATS_DEFAULT_PERIOD', 'week'),
        'default_daily_days': int(os.getenv('TIME_STATS_DEFAULT_DAYS', 30)),
    }

    @classmethod
    def is_sqlite(cls) -> bool:
        return cls.DATABASE['url'].startswith('sqlite')

    @classmethod
    def engine_options(cls) -> Dict:
        """Keyword arguments for sqlalchemy.create_engine"""
        connect_args = {}
        if cls.is_sqlite():
            # Sync endpoints run in the threadpool
            connect_args['check_same_thread'] = False
        elif cls.DATABASE['sslmode']:
            connect_args['sslmode'] = cls.DATABASE['sslmode']
        return {
            'connect_args': connect_args,
            'echo': cls.DATABASE['echo'],
        }


app_config = AppConfig()
