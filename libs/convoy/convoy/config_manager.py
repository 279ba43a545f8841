import json
import os
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from convoy.models.config import ConvoyConfig, LoggingConfig, ServiceConfig
from convoy_logging import get_logger

logger = get_logger("config")

DEFAULT_CONFIG_PATHS = (
    Path("config/convoy.yaml"),
    Path("config/convoy.yml"),
    Path.home() / ".convoy" / "config.yaml",
)

# Config-file sections whose keys are flattened into ServiceConfig fields
# as "<section>_<key>".
SERVICE_SECTIONS = ("redis", "proxy", "worker")

ENV_OVERRIDES = {
    "CONVOY_REDIS_ADDR": "redis_addr",
    "CONVOY_REDIS_PASSWORD": "redis_password",
    "CONVOY_PROXY_DIR": "proxy_dir",
    "CONVOY_WORKER_DIR": "worker_dir",
    "CONVOY_LOG_DIR": "log_dir",
}


class ConfigManager:
    def __init__(self, config_path: Path | None = None, load_env_file: bool = True):
        if load_env_file:
            dotenv_path = find_dotenv(usecwd=True)
            if dotenv_path:
                load_dotenv(dotenv_path)

        if config_path is None:
            env_path = os.getenv("CONVOY_CONFIG_PATH")
            if env_path:
                config_path = Path(env_path)
            else:
                config_path = next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)

        self.config_path = config_path
        self.config = self.load_config()

    def _read_file(self) -> dict[str, Any]:
        if self.config_path is None or not self.config_path.exists():
            return {}

        with open(self.config_path, "r") as f:
            if self.config_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")
        return data

    def load_config(self) -> ConvoyConfig:
        data = self._read_file()
        service_fields = {f.name for f in fields(ServiceConfig)}
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key in SERVICE_SECTIONS and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    field_name = f"{key}_{sub_key}"
                    if field_name in service_fields:
                        values[field_name] = sub_value
                    else:
                        logger.warning("Ignoring unknown config key", key=f"{key}.{sub_key}")
            elif key in service_fields:
                values[key] = value
            elif key != "logging":
                logger.warning("Ignoring unknown config key", key=key)

        for env_var, field_name in ENV_OVERRIDES.items():
            env_value = os.getenv(env_var)
            if env_value:
                values[field_name] = env_value

        if "proxy_ports" in values:
            values["proxy_ports"] = tuple(int(p) for p in values["proxy_ports"])
        if "worker_api_port" in values:
            values["worker_api_port"] = int(values["worker_api_port"])
        for path_field in ("proxy_dir", "worker_dir", "log_dir"):
            if path_field in values:
                values[path_field] = str(Path(values[path_field]).expanduser())

        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            raise ValueError("The 'logging' section must be a mapping")
        if "log_dir" not in logging_data and "log_dir" in values:
            logging_data = {**logging_data, "log_dir": values["log_dir"]}
        if os.getenv("CONVOY_LOG_LEVEL"):
            logging_data = {**logging_data, "level": os.environ["CONVOY_LOG_LEVEL"]}
        logging_fields = {f.name for f in fields(LoggingConfig)}
        for key in set(logging_data) - logging_fields:
            logger.warning("Ignoring unknown config key", key=f"logging.{key}")
        logging_data = {k: v for k, v in logging_data.items() if k in logging_fields}

        return ConvoyConfig(
            services=ServiceConfig(**values),
            logging=LoggingConfig(**logging_data),
        )

    def save_config(self, config: ConvoyConfig, path: Path | None = None):
        path = path or self.config_path or DEFAULT_CONFIG_PATHS[-1]
        services = config.services
        data: dict[str, Any] = {section: {} for section in SERVICE_SECTIONS}
        for f in fields(ServiceConfig):
            value = getattr(services, f.name)
            if isinstance(value, tuple):
                value = list(value)
            section, _, key = f.name.partition("_")
            if section in SERVICE_SECTIONS:
                data[section][key] = value
            else:
                data[f.name] = value
        data["logging"] = {f.name: getattr(config.logging, f.name) for f in fields(LoggingConfig)}

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)
