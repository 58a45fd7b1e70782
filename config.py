import os
import warnings


DEFAULT_ADMIN_PASSWORD = 'Admin@123456'


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {'1', 'true', 'yes', 'on'}


class BaseConfig:
    """Base configuration with safe defaults."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")
    if SECRET_KEY == "dev":
        warnings.warn(
            "Using default SECRET_KEY; set the SECRET_KEY environment variable in production",
            UserWarning,
        )

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Accounts and data created on first start.
    SEED_ON_STARTUP = _env_flag('SEED_ON_STARTUP', True)
    SEED_ADMIN_ROLE = os.environ.get('SEED_ADMIN_ROLE', 'Admin')
    SEED_ADMIN_USERNAME = os.environ.get('SEED_ADMIN_USERNAME', 'admin')
    SEED_ADMIN_EMAIL = os.environ.get('SEED_ADMIN_EMAIL', 'admin@carparts.com')
    SEED_ADMIN_PASSWORD = os.environ.get('SEED_ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD)
    SEED_TEST_USERNAME = os.environ.get('SEED_TEST_USERNAME', 'testuser')
    SEED_TEST_EMAIL = os.environ.get('SEED_TEST_EMAIL', 'test@carparts.com')
    SEED_TEST_PASSWORD = os.environ.get('SEED_TEST_PASSWORD', 'Test@123456')
    SEED_TEST_COUNTRY = os.environ.get('SEED_TEST_COUNTRY', 'North Macedonia')
    SEED_LISTING_TARGET = int(os.environ.get('SEED_LISTING_TARGET', 30))
    SEED_RANDOM_SEED = os.environ.get('SEED_RANDOM_SEED')

    PASSWORD_MIN_LENGTH = int(os.environ.get('PASSWORD_MIN_LENGTH', 6))
    PASSWORD_REQUIRE_DIGIT = _env_flag('PASSWORD_REQUIRE_DIGIT', True)
    PASSWORD_REQUIRE_LOWERCASE = _env_flag('PASSWORD_REQUIRE_LOWERCASE', True)
    PASSWORD_REQUIRE_UPPERCASE = _env_flag('PASSWORD_REQUIRE_UPPERCASE', True)
    PASSWORD_REQUIRE_NON_ALPHANUMERIC = _env_flag('PASSWORD_REQUIRE_NON_ALPHANUMERIC', True)


class DevelopmentConfig(BaseConfig):
    SQLALCHEMY_DATABASE_URI = 'sqlite:///database.sqlite'


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SEED_ON_STARTUP = False
    SEED_RANDOM_SEED = '1337'


class ProductionConfig(BaseConfig):
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///database.sqlite')


def validate_runtime_config(config: dict):
    """Fail fast on insecure runtime configuration."""
    if config.get('APP_ENV') != 'production':
        return
    if not config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY is required in production')
    if config.get('SEED_ON_STARTUP') and config.get('SEED_ADMIN_PASSWORD') == DEFAULT_ADMIN_PASSWORD:
        raise RuntimeError('SEED_ADMIN_PASSWORD must be changed before seeding a production database')
