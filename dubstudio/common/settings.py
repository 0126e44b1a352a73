# dubstudio/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dubstudio.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "dubstudio"
    user: str = "dubuser"
    password: str = "dubpass"
    # "public" means: no explicit schema on the metadata
    schema_name: str = Field(default="public", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    model_config = {"populate_by_name": True}

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class AuthConfig(BaseModel):
    jwt_secret: str = "dev-only-secret"
    jwt_algo: str = "HS256"
    admin_role: str = "admin"
    token_ttl_sec: int = 60 * 60 * 12


class ImageConfig(BaseModel):
    backend: str = "local"  # local|cloudinary
    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""
    upload_url: str = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
    delivery_host: str = "https://res.cloudinary.com"
    timeout_sec: float = 30.0
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_formats: List[str] = Field(default_factory=lambda: ["JPEG", "PNG", "WEBP", "GIF"])

    placeholder_banner: str = "/images/placeholder-banner.jpg"
    placeholder_cover: str = "/images/placeholder-cover.jpg"
    placeholder_avatar: str = "/images/default-avatar.png"

    @field_validator("allowed_formats", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v, upper=True)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "dubstudio"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"
    tz: str = "UTC"

    # -------- Paths & layout (host-side) --------
    data_root: Path = Path("./var/dubstudio")
    uploads_subdir: str = "uploads"

    # Optional absolute override (leave empty to use DATA_ROOT + subdir)
    upload_root_override: Optional[Path] = Field(default=None, alias="UPLOAD_ROOT")

    # Optional single URL for the whole app (takes precedence over db.*)
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    auth: AuthConfig = AuthConfig()
    images: ImageConfig = ImageConfig()

    # -------- Alembic / migrations --------
    alembic_script_location: str = "dubstudio/database/alembic"
    alembic_version_table_schema: Optional[str] = None

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = False
    test_db_image: str = "postgres:15-alpine"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("use_testcontainers", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    # ===== Derived paths =====
    @computed_field  # type: ignore[misc]
    @property
    def upload_root(self) -> Path:
        if self.upload_root_override:
            return Path(self.upload_root_override)
        return self.data_root / self.uploads_subdir

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.database_url_override or self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> Optional[str]:
        s = (self.db.schema_name or "").strip()
        if not s or s.lower() == "public":
            return None
        return s


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from dubstudio.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.app_env in ("development", "test"):
        for p in (s.data_root, s.upload_root):
            p.mkdir(parents=True, exist_ok=True)
    return s
