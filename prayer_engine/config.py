import os
from dotenv import load_dotenv

# Load .env file from the project root if there is one
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)


class Config:
    """Base configuration."""
    API_TITLE = "Prayer Times API"
    API_VERSION = "1.0.0"
    LOG_LEVEL = os.environ.get('LOG_LEVEL', "INFO")

    # Calculation defaults used when a request does not name them
    DEFAULT_CALCULATION_METHOD = os.environ.get('DEFAULT_CALCULATION_METHOD', "UmmAlQura")
    DEFAULT_MADHAB = os.environ.get('DEFAULT_MADHAB', "Shafi")

    # Minutes before a prayer at which it is flagged imminent
    IMMINENT_THRESHOLD_MINUTES = int(os.environ.get('IMMINENT_THRESHOLD_MINUTES', 5))

    # Upper bound for the days= parameter of /api/timesForGPS
    MAX_DAYS = int(os.environ.get('MAX_DAYS', 31))


class DevelopmentConfig(Config):
    LOG_LEVEL = os.environ.get('LOG_LEVEL', "DEBUG")


class TestingConfig(Config):
    TESTING = True
    DEFAULT_CALCULATION_METHOD = "UmmAlQura"
    DEFAULT_MADHAB = "Shafi"
    IMMINENT_THRESHOLD_MINUTES = 5
    MAX_DAYS = 31


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'default': Config,
}


def get_config(name: str | None = None) -> type[Config]:
    name = name or os.environ.get('PRAYER_ENGINE_ENV', 'default')
    return config_by_name.get(name, config_by_name['default'])
