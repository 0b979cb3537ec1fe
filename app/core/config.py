import os
from dotenv import load_dotenv

# Pick up a local .env before reading anything from the environment
load_dotenv()


class Settings:
    PROJECT_NAME: str = "Expense Tracker API"
    PROJECT_VERSION: str = "1.0.0"

    def __init__(self, **overrides):
        # Infrastructure Config (Loaded from .env with defaults)
        self.DB_DRIVER: str = os.getenv("DB_DRIVER", "postgresql+psycopg2")
        self.DB_HOST: str = os.getenv("DB_HOST", "db")
        self.DB_PORT: str = os.getenv("DB_PORT", "5432")
        self.DB_USER: str = os.getenv("DB_USER", "tracker_user")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "tracker_password")
        self.DB_NAME: str = os.getenv("DB_NAME", "tracker_db")
        self.DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
        self.DB_POOL_TIMEOUT: float = float(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "true").lower() in ("1", "true", "yes")

        # Security Config
        self.JWT_SECRET: str = os.getenv("JWT_SECRET", "super_secret_default_key")
        self.JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Server Config
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "5000"))
        self.CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        self._database_url = os.getenv("DATABASE_URL")

        for key, value in overrides.items():
            if key == "DATABASE_URL":
                self._database_url = value
            elif hasattr(self, key):
                setattr(self, key, value)
            else:
                raise AttributeError(f"Unknown setting: {key}")

    # DATABASE_URL wins; otherwise build it from the individual parts
    @property
    def DATABASE_URL(self) -> str:
        if self._database_url:
            return self._database_url
        return f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def cors_origins(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
