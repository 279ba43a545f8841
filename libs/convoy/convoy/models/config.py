from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration shared read-only by every service adapter.

    Built once by ``ConfigManager`` and passed by reference into each
    adapter. Paths for binaries and config files of the proxy and worker
    are relative to their working directories.
    """

    # Redis data store
    redis_addr: str = "localhost:6379"
    redis_password: str = ""
    redis_unit: str = "redis"
    redis_binary: str = "redis-server"
    redis_cli: str = "redis-cli"
    redis_config: str | None = None
    redis_backend: str = "systemd"

    # Reverse proxy
    proxy_dir: str = str(Path.home() / "proxy")
    proxy_binary: str = "proxy.bin"
    proxy_config: str = "config.toml"
    proxy_ports: tuple[int, ...] = (80, 443)
    proxy_session: str = "proxy"
    proxy_backend: str = "screen"

    # Browser-automation worker
    worker_dir: str = str(Path.home() / "worker")
    worker_binary: str = "worker.js"
    worker_config: str = "config.toml"
    worker_interpreter: str = "node"
    worker_api_port: int = 3000
    worker_health_path: str = "/health"
    worker_session: str = "worker"
    worker_backend: str = "screen"

    log_dir: str = str(Path.home() / ".convoy" / "logs")
    use_sudo: bool = True

    @property
    def redis_host(self) -> str:
        host, sep, _ = self.redis_addr.rpartition(":")
        if not sep:
            host = self.redis_addr
        return host or "localhost"

    @property
    def redis_port(self) -> int:
        _, _, port = self.redis_addr.rpartition(":")
        return int(port) if port.isdigit() else 6379

    @property
    def proxy_binary_path(self) -> Path:
        return Path(self.proxy_dir) / self.proxy_binary

    @property
    def proxy_config_path(self) -> Path:
        return Path(self.proxy_dir) / self.proxy_config

    @property
    def proxy_log_path(self) -> Path:
        return Path(self.proxy_dir) / "proxy.log"

    @property
    def worker_binary_path(self) -> Path:
        return Path(self.worker_dir) / self.worker_binary

    @property
    def worker_config_path(self) -> Path:
        return Path(self.worker_dir) / self.worker_config

    @property
    def worker_log_path(self) -> Path:
        return Path(self.worker_dir) / "logs" / "worker_startup.log"

    @property
    def worker_health_url(self) -> str:
        return f"http://localhost:{self.worker_api_port}{self.worker_health_path}"


@dataclass
class LoggingConfig:
    """Logging settings for the supervisor itself."""

    log_dir: str = str(Path.home() / ".convoy" / "logs")
    level: str = "INFO"
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5
    enable_syslog: bool = False
    enable_console: bool = False


@dataclass
class ConvoyConfig:
    """Everything loaded from the config file and environment."""

    services: ServiceConfig = field(default_factory=ServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
