# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGODB_URI: str = "mongodb://127.0.0.1:27017/recipes_db"
    MONGODB_DB: str = "recipes_db"
    MONGO_TIMEOUT_MS: int = 10000  # 서버 선택 타임아웃

    API_HOST: str = "0.0.0.0"  # 셸의 HOST(호스트명)와 겹치지 않게
    PORT: int = 4000
    CORS_ORIGINS: List[str] = ["*"]  # 예: '["http://localhost:5173"]'
    LOG_LEVEL: str = "INFO"

settings = Settings()
