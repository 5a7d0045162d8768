from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import os
import json


class Settings(BaseSettings):
    """应用配置"""

    # API 配置
    API_TITLE: str = "Bakery API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Bakery category CRUD API"

    # 数据库配置（默认使用本地 SQLite，免去外部数据库依赖）
    DATABASE_URL: str = "sqlite:///./bakery.db"
    # 启动时按模型元数据建表
    AUTO_CREATE_TABLES: bool = True
    # 数据库异常时是否把原始错误信息返回给前端（仅排查问题时开启）
    DEBUG_DB_ERRORS: bool = False

    LOG_LEVEL: str = "INFO"

    # CORS 配置
    # 环境变量 CORS_ORIGINS 使用 JSON 数组：["https://a.com","https://b.com"]
    # 代码里直接传入时也接受逗号分隔字符串
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None:
            return v
        if isinstance(v, str):
            raw = v.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                except ValueError:
                    parsed = None
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            return [item.strip() for item in raw.split(",") if item.strip()]
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v

    model_config = SettingsConfigDict(env_file=os.getenv("ENV_FILE") or ".env", extra="ignore")


settings = Settings()
