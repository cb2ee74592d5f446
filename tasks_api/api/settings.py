# api/settings.py
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "tasks-api"
    SERVER_ADDRESS: str = "127.0.0.1:3000"
    DATABASE_URL: str
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 64
    DB_ACQUIRE_TIMEOUT: float = 5.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("SERVER_ADDRESS")
    @classmethod
    def check_server_address(cls, value: str) -> str:
        split_address(value)
        return value

    @property
    def host(self) -> str:
        return split_address(self.SERVER_ADDRESS)[0]

    @property
    def port(self) -> int:
        return split_address(self.SERVER_ADDRESS)[1]


def split_address(address: str) -> tuple[str, int]:
    """Разбирает строку вида host:port (IPv6 в квадратных скобках)."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"SERVER_ADDRESS must look like host:port, got {address!r}")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ValueError(f"Port out of range: {port_number}")
    return host.strip("[]"), port_number


@lru_cache
def get_settings() -> Settings:
    return Settings()
