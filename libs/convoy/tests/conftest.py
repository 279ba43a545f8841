"""Shared fixtures for Convoy tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from convoy.models.config import ServiceConfig
from convoy.models.supervisor import SupervisorResult


class FakeClock:
    """Clock whose sleeps advance time instantly.

    ``on_sleep`` is called after every completed sleep with the clock, so
    tests can change the world (or cancel a context) as time passes.
    """

    def __init__(self, start: datetime | None = None, on_sleep=None):
        self.start = start or datetime.now(timezone.utc)
        self.elapsed = 0.0
        self.sleeps: list[float] = []
        self.on_sleep = on_sleep

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.elapsed)

    def monotonic(self) -> float:
        return self.elapsed

    def sleep(self, seconds, ctx=None) -> bool:
        if ctx is not None and ctx.cancelled:
            return True
        self.elapsed += seconds
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(self)
        return False


class FakeSupervisor:
    """In-memory supervisor recording every call into a shared event list."""

    kind = "fake"

    def __init__(self, events: list | None = None, running=(), fail_launch=(), fail_terminate=(), fail_enable=()):
        self.events = events if events is not None else []
        self.running = set(running)
        self.fail_launch = set(fail_launch)
        self.fail_terminate = set(fail_terminate)
        self.fail_enable = set(fail_enable)
        self.launched: list[dict] = []

    def launch(self, name, command=None, cwd=None, log_path=None):
        self.events.append(("launch", name))
        if name in self.fail_launch:
            return SupervisorResult(success=False, message="launch refused", exit_code=1)
        self.launched.append({"name": name, "command": command, "cwd": cwd, "log_path": log_path})
        self.running.add(name)
        return SupervisorResult(success=True, message="")

    def terminate(self, name):
        self.events.append(("terminate", name))
        if name in self.fail_terminate:
            return SupervisorResult(success=False, message="session multiplexer error", exit_code=1)
        self.running.discard(name)
        return SupervisorResult(success=True, message="")

    def enable(self, name):
        self.events.append(("enable", name))
        if name in self.fail_enable:
            return SupervisorResult(success=False, message="permission denied", exit_code=1)
        return SupervisorResult(success=True, message="")

    def state(self, name):
        return "active" if name in self.running else "inactive"

    def exists(self, name):
        return name in self.running


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def events():
    return []


@pytest.fixture
def supervisor(events):
    return FakeSupervisor(events)


@pytest.fixture
def service_config(tmp_path: Path) -> ServiceConfig:
    """Config whose binaries and config files all exist on disk."""
    redis_binary = tmp_path / "bin" / "redis-server"
    redis_binary.parent.mkdir()
    redis_binary.write_text("")

    proxy_dir = tmp_path / "proxy"
    proxy_dir.mkdir()
    (proxy_dir / "proxy.bin").write_text("")
    (proxy_dir / "config.toml").write_text("")

    worker_dir = tmp_path / "worker"
    worker_dir.mkdir()
    (worker_dir / "worker.js").write_text("")
    (worker_dir / "config.toml").write_text("")

    return ServiceConfig(
        redis_binary=str(redis_binary),
        proxy_dir=str(proxy_dir),
        worker_dir=str(worker_dir),
        log_dir=str(tmp_path / "logs"),
        use_sudo=False,
    )


@pytest.fixture
def make_supervisor(events):
    def factory(**kwargs):
        return FakeSupervisor(events, **kwargs)

    return factory


@pytest.fixture
def make_clock():
    return FakeClock
