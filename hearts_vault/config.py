import os
from pathlib import Path
from dotenv import load_dotenv

from .services.flames import FLAMES_RESULTS

BASE_DIR = Path(__file__).resolve().parent.parent  # project root (where wsgi.py is)
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default) -> tuple:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'hearts_vault.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS: the single front-end origin allowed to submit
    ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "https://prerithm.github.io")
    CORS_MAX_AGE = int(os.getenv("CORS_MAX_AGE", "86400"))

    # Submissions
    MAX_NAME_LENGTH = int(os.getenv("MAX_NAME_LENGTH", "200"))
    STATS_COUNTER_KEY = os.getenv("STATS_COUNTER_KEY", "totalSubmissions")
    SUBMISSION_ID_PREFIX = os.getenv("SUBMISSION_ID_PREFIX", "evt_")
    ALLOWED_RESULTS = _env_list("ALLOWED_RESULTS", FLAMES_RESULTS)
    VERIFY_FLAMES_RESULT = _env_bool("VERIFY_FLAMES_RESULT")

    # Platform-injected request context (Cloudflare names by default)
    CLIENT_IP_HEADER = os.getenv("CLIENT_IP_HEADER", "CF-Connecting-IP")
    GEO_COUNTRY_HEADER = os.getenv("GEO_COUNTRY_HEADER", "CF-IPCountry")
    GEO_CITY_HEADER = os.getenv("GEO_CITY_HEADER", "CF-IPCity")
    IP_HASH_SALT = os.getenv("IP_HASH_SALT", "")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SWAGGER_ENABLED = _env_bool("SWAGGER_ENABLED")
    SWAGGER = {"title": "Hearts Vault API", "uiversion": 3}


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ALLOWED_ORIGIN = "https://hearts.example.com"
    IP_HASH_SALT = ""
    ALLOWED_RESULTS = FLAMES_RESULTS
    VERIFY_FLAMES_RESULT = False
    SWAGGER_ENABLED = False
