from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from urllib.parse import quote_plus
import os

import click
from dotenv import load_dotenv

from config import DevelopmentConfig, TestingConfig, ProductionConfig, validate_runtime_config
from models import db, migrate
from seeder import seed_app

load_dotenv()

app = Flask(__name__)
APP_ENV = os.getenv('APP_ENV', 'development').strip().lower()


def _normalized_database_url(url: str | None) -> str | None:
    """Normalize DB URL so plain ``mysql://`` strings work with SQLAlchemy.

    SQLAlchemy expects an explicit driver such as ``mysql+pymysql://``.
    """
    if not url:
        return url
    if url.startswith('mysql://'):
        return url.replace('mysql://', 'mysql+pymysql://', 1)
    return url


def _database_url_from_parts() -> str | None:
    """Build DATABASE_URL from simple DB_* env vars."""
    db_name = (os.getenv('DB_NAME') or '').strip()
    db_user = (os.getenv('DB_USER') or '').strip()
    db_password = os.getenv('DB_PASSWORD')
    if not db_name or not db_user or db_password is None:
        return None

    db_driver = (os.getenv('DB_DRIVER', 'mysql+pymysql') or 'mysql+pymysql').strip()
    db_host = (os.getenv('DB_HOST', 'localhost') or 'localhost').strip()
    db_port = (os.getenv('DB_PORT') or '').strip()

    host_part = db_host
    if db_port:
        host_part = f"{db_host}:{db_port}"

    quoted_user = quote_plus(db_user)
    quoted_password = quote_plus(db_password)
    quoted_db_name = quote_plus(db_name)
    return f"{db_driver}://{quoted_user}:{quoted_password}@{host_part}/{quoted_db_name}?charset=utf8mb4"


def _resolve_database_url() -> tuple[str | None, str]:
    database_url = os.getenv('DATABASE_URL')
    source = 'DATABASE_URL'
    if not database_url:
        database_url = _database_url_from_parts()
        source = 'DB_* variables' if database_url else 'default config'
    return _normalized_database_url(database_url), source


def _apply_database_uri_override(config: dict, resolved_url: str | None):
    """Ensure runtime config uses resolved DB URL even after class import-time defaults."""
    if resolved_url:
        config['SQLALCHEMY_DATABASE_URI'] = resolved_url


config_map = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
app.config.from_object(config_map.get(APP_ENV, DevelopmentConfig))

# The testing config always runs against its own in-memory database.
if APP_ENV != 'testing':
    database_url, database_url_source = _resolve_database_url()
    _apply_database_uri_override(app.config, database_url)
else:
    database_url, database_url_source = None, 'default config'
app.config['APP_ENV'] = APP_ENV
validate_runtime_config(app.config)

if not os.path.exists('logs'):
    os.makedirs('logs')
file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=10)
file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
file_handler.setLevel(logging.INFO)
app.logger.addHandler(file_handler)
app.logger.setLevel(logging.INFO)
app.logger.info('CarParts startup (env=%s)', APP_ENV)
if database_url:
    app.logger.info('Database configuration loaded from %s', database_url_source)
else:
    app.logger.info('Database configuration loaded from default config')

db.init_app(app)
migrate.init_app(app, db)


startup_seed_report = None


def run_startup_seed():
    """Seed the database once at startup.

    Runs on import (see bottom of module) when ``SEED_ON_STARTUP`` is set so a
    fresh deployment always has the admin account, categories and demo
    listings in place.
    """
    global startup_seed_report
    report = seed_app(app)
    app.logger.info(
        'Startup seed finished: role_created=%s admin_created=%s categories_created=%s '
        'test_user_created=%s listings_created=%s',
        report.role_created,
        report.admin_created,
        report.categories_created,
        report.test_user_created,
        report.listings_created,
    )
    startup_seed_report = report
    return report


def seed_once():
    """Return this process's seed report, seeding now if startup did not.

    Entry points that import ``app`` would otherwise report the second,
    empty pass instead of the run that created the rows.
    """
    global startup_seed_report
    report, startup_seed_report = startup_seed_report, None
    if report is not None:
        return report
    return seed_app(app)


def seed_on_startup_if_enabled():
    if app.config.get('SEED_ON_STARTUP'):
        return run_startup_seed()
    return None


@app.cli.command('seed-db')
def seed_db_command():
    """Create tables and seed default accounts, categories and listings."""
    report = seed_once()
    click.echo(f"Role created: {'yes' if report.role_created else 'no'}")
    click.echo(f"Admin user created: {'yes' if report.admin_created else 'no'}")
    click.echo(f"Categories created: {'yes' if report.categories_created else 'no'}")
    click.echo(f"Test user created: {'yes' if report.test_user_created else 'no'}")
    click.echo(f"Listings created: {report.listings_created}")


seed_on_startup_if_enabled()
