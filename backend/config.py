import os
import secrets
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict


class JWTConfig(BaseModel):
    secret_key: str = ""
    algorithm: str = "HS256"


class AuthConfig(BaseModel):
    jwt: JWTConfig = JWTConfig()


class DatabaseConfig(BaseModel):
    url: str = ""
    echo: bool = False
    request_timeout_seconds: float = 15.0


class EnrichmentConfig(BaseModel):
    enabled: bool = True
    timeout_seconds: float = 8.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    )


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    auth: AuthConfig = AuthConfig()
    database: DatabaseConfig = DatabaseConfig()
    enrichment: EnrichmentConfig = EnrichmentConfig()
    logging: LoggingConfig = LoggingConfig()
    data_dir: str = "../data"
    cors_origins: list[str] = ["http://localhost:3000"]
    branding: str = "DumpIt"

    def database_url(self) -> str:
        if self.database.url:
            return self.database.url
        db_path = Path(self.data_dir) / "dumpit.db"
        return f"sqlite:///{db_path.resolve()}"


def _get_config_path() -> Path:
    return Path(os.environ.get("CONFIG_PATH", "../data/config.yaml"))


def _env_bool(name: str) -> bool:
    return os.environ[name].strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    # 1. Start with env-var based config
    cfg = AppConfig(
        auth=AuthConfig(jwt=JWTConfig(secret_key=os.environ.get("JWT_SECRET_KEY", ""))),
        database=DatabaseConfig(url=os.environ.get("DATABASE_URL", "")),
        data_dir=os.environ.get("DATA_DIR", "../data"),
    )

    # 2. If config.yaml exists, overlay its values
    config_path = _get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        cfg = AppConfig(**data)

    # 3. Env vars override config.yaml for key settings
    if os.environ.get("JWT_SECRET_KEY"):
        cfg.auth.jwt.secret_key = os.environ["JWT_SECRET_KEY"]
    if os.environ.get("DATA_DIR"):
        cfg.data_dir = os.environ["DATA_DIR"]
    if os.environ.get("DATABASE_URL"):
        cfg.database.url = os.environ["DATABASE_URL"]
    if os.environ.get("LOG_LEVEL"):
        cfg.logging.level = os.environ["LOG_LEVEL"]
    if os.environ.get("ENRICHMENT_ENABLED"):
        cfg.enrichment.enabled = _env_bool("ENRICHMENT_ENABLED")

    # 4. Auto-generate JWT secret if still empty
    if not cfg.auth.jwt.secret_key:
        cfg.auth.jwt.secret_key = secrets.token_hex(32)
        _persist_jwt_secret(cfg.auth.jwt.secret_key)

    return cfg


def _persist_jwt_secret(secret: str):
    """Save auto-generated JWT secret to config.yaml so it survives restarts."""
    config_path = _get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

    data.setdefault("auth", {}).setdefault("jwt", {})["secret_key"] = secret

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True)


config = load_config()
