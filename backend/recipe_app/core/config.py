# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGO_DB: str = "recipes"
    MONGO_COLLECTION: str = "recipes"
    MONGO_TIMEOUT_MS: int = 5000

    # Edamam Recipe Search API v2
    EDAMAM_BASE_URL: str = "https://api.edamam.com/api/recipes/v2"
    EDAMAM_APP_ID: str | None = None
    EDAMAM_APP_KEY: str | None = None
    EDAMAM_USER_ID: str | None = None   # 계정 설정에 따라 Edamam-Account-User 헤더 필요
    PROVIDER_TIMEOUT: float = 20.0

    SAMPLE_SIZE: int = 12    # 응답 레시피 수
    FETCH_LIMIT: int = 100   # provider 결과 중 저장할 최대 수

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
