from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    app_name: str = 'proton-drive-mcp'
    app_version: str = '1.0.0'
    proton_drive_path: Optional[str] = None
    transport: Literal['stdio', 'http'] = 'stdio'
    app_host: str = '127.0.0.1'
    app_port: int = Field(default=8765, ge=1, le=65535)
    log_level: str = 'info'


settings = Settings()
