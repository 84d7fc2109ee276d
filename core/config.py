from pydantic_settings import BaseSettings
from pydantic import ConfigDict

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env")

    ENV: str = "development"
    PLATFORM: str = "prod"

    DATABASE_URL: str = "sqlite:///./chirper.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_ISSUER: str = "chirper"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 60
    BCRYPT_ROUNDS: int = 12

    MAX_CHIRP_LENGTH: int = 140
    BANNED_WORDS: list[str] = ["kerfuffle", "sharbert", "fornax"]
    FILESERVER_ROOT: str = "static"

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]


settings = Settings()
