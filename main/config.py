from decouple import AutoConfig, Csv
from pathlib import Path

config = AutoConfig()


class Config:
    def __init__(self):
        # Environment
        self.ENV = config("ENV", default="development")
        self.TESTING = config("TESTING", default=False, cast=bool)

        # Database
        self.DB_HOST = config("DB_HOST", default="localhost")
        self.DB_PORT = config("DB_PORT", default=5432, cast=int)
        self.DB_USER = config("DB_USER", default="markt")
        self.DB_PASSWORD = config("DB_PASSWORD", default="markt123")
        self.DB_NAME = config("DB_NAME", default="markt_db")
        self.DATABASE_URL = config("DATABASE_URL", default="")
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False

        # Redis
        self.REDIS_HOST = config("REDIS_HOST", default="localhost")
        self.REDIS_PORT = config("REDIS_PORT", default=6379, cast=int)

        # Auth
        self.SECRET_KEY = config("SECRET_KEY", default="dev-secret-key")
        self.SESSION_COOKIE_NAME = "markt_session"

        # App
        self.BIND = config("BIND", default="127.0.0.1:8000")
        self.DEBUG = config("DEBUG", default=True, cast=bool)

        # API docs (flask-smorest)
        self.API_TITLE = "Markt Search API"
        self.API_VERSION = "v1"
        self.OPENAPI_VERSION = "3.0.2"

        # Logging
        self.LOG_DIR = Path(config("LOG_DIR", default="logs"))
        self.LOG_LEVEL = config("LOG_LEVEL", default="INFO")

        # Languages
        self.LANGUAGES = config("LANGUAGES", default="en", cast=Csv())
        self.DEFAULT_LANGUAGE = config("DEFAULT_LANGUAGE", default="en")

        # Doofinder internal search
        self.DOOFINDER_ENABLED = config("DOOFINDER_ENABLED", default="no")
        self.DOOFINDER_API_KEY = config("DOOFINDER_API_KEY", default="")
        self.DOOFINDER_HASHID = config("DOOFINDER_HASHID", default="")
        self.DOOFINDER_API_URL = config("DOOFINDER_API_URL", default="")
        # Upper bound of results fetched in a single API call; caps the
        # number of products internal search can return.
        self.DOOFINDER_RESULTS_PER_PAGE = config(
            "DOOFINDER_RESULTS_PER_PAGE", default=10000, cast=int
        )
        self.DOOFINDER_TIMEOUT = config("DOOFINDER_TIMEOUT", default=5.0, cast=float)
        self.DOOFINDER_BANNER_TTL = config(
            "DOOFINDER_BANNER_TTL", default=1800, cast=int
        )
        self.DOOFINDER_BANNER_SESSION_COOKIE = config(
            "DOOFINDER_BANNER_SESSION_COOKIE", default="df_session"
        )

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    def get(self, key, language=None, default=None):
        """Look up a setting, preferring its language-scoped variant."""
        if language:
            scoped = config(f"{key}_{language.upper()}", default="")
            if scoped:
                return scoped
        return getattr(self, key, default)


settings = Config()
