"""Application configuration."""
import os


def _ports(value: str) -> tuple:
    return tuple(int(p) for p in value.split(",") if p.strip())


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Browser UI is served from another origin
    CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")

    # Receipt settings
    BRAND_HEADER = os.environ.get("BRAND_HEADER", "Hard Plot Center")
    TEXT_ENCODING = os.environ.get("TEXT_ENCODING", "cp437")

    # Connection settings
    DEFAULT_BAUD_RATE = int(os.environ.get("DEFAULT_BAUD_RATE", 19200))
    CONNECT_TIMEOUT = float(os.environ.get("CONNECT_TIMEOUT", 5.0))  # seconds

    # Network discovery (9100 = RAW, 515 = LPD)
    DISCOVERY_BASE_IP = os.environ.get("DISCOVERY_BASE_IP", "192.168.1")
    DISCOVERY_PORTS = _ports(os.environ.get("DISCOVERY_PORTS", "9100,515"))
    DISCOVERY_TIMEOUT = float(os.environ.get("DISCOVERY_TIMEOUT", 0.5))  # seconds per probe
    DISCOVERY_WORKERS = int(os.environ.get("DISCOVERY_WORKERS", 64))


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    CONNECT_TIMEOUT = 1.0
    DISCOVERY_TIMEOUT = 0.2


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
