"""Unit tests for the Redis adapter."""

import dataclasses
from unittest.mock import patch

import pytest

from convoy.errors import (
    AlreadyRunning,
    MissingBinary,
    MissingConfig,
    OperationCancelled,
    PingFailed,
    ServiceInactive,
    StartFailed,
    StopFailed,
)
from convoy.models.supervisor import SupervisorResult
from convoy.runtime import Context
from convoy.services import RedisService


@pytest.fixture
def redis(service_config, supervisor, clock):
    return RedisService(service_config, supervisor=supervisor, clock=clock)


class TestRedisStart:
    """Tests for starting Redis."""

    def test_start_launches_and_enables_unit(self, redis, events, clock):
        """Test start launches the unit, enables it and settles."""
        redis.start()

        assert events == [("launch", "redis"), ("enable", "redis")]
        assert clock.sleeps == [2.0]
        assert redis.is_running() is True

    def test_already_running(self, service_config, make_supervisor, clock, events):
        """Test starting a running unit fails without side effects."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        with pytest.raises(AlreadyRunning):
            redis.start()

        assert events == []

    def test_missing_absolute_binary(self, service_config, supervisor, clock, events, tmp_path):
        """Test a missing absolute binary path is reported."""
        config = dataclasses.replace(service_config, redis_binary=str(tmp_path / "nope"))
        redis = RedisService(config, supervisor=supervisor, clock=clock)

        with pytest.raises(MissingBinary) as exc_info:
            redis.start()

        assert exc_info.value.path == str(tmp_path / "nope")
        assert events == []

    def test_binary_looked_up_on_path(self, service_config, supervisor, clock):
        """Test bare binary names are resolved on PATH."""
        config = dataclasses.replace(service_config, redis_binary="redis-server")
        redis = RedisService(config, supervisor=supervisor, clock=clock)

        with patch("convoy.services.redis.shutil.which", return_value=None):
            assert redis.binary_available() is False
        with patch("convoy.services.redis.shutil.which", return_value="/usr/bin/redis-server"):
            assert redis.binary_available() is True

    def test_missing_config(self, service_config, supervisor, clock, events, tmp_path):
        """Test a configured but absent redis.conf is reported."""
        config = dataclasses.replace(service_config, redis_config=str(tmp_path / "redis.conf"))
        redis = RedisService(config, supervisor=supervisor, clock=clock)

        with pytest.raises(MissingConfig):
            redis.start()

        assert events == []

    def test_launch_failure(self, service_config, make_supervisor, clock):
        """Test a refused launch raises StartFailed carrying the cause."""
        redis = RedisService(service_config, supervisor=make_supervisor(fail_launch={"redis"}), clock=clock)

        with pytest.raises(StartFailed, match="launch refused"):
            redis.start()

    def test_enable_failure_is_not_fatal(self, service_config, make_supervisor, clock):
        """Test failing to enable at boot only warns."""
        redis = RedisService(service_config, supervisor=make_supervisor(fail_enable={"redis"}), clock=clock)

        redis.start()

        assert redis.is_running() is True

    def test_cancelled_context(self, redis, events):
        """Test a cancelled context aborts before anything runs."""
        ctx = Context()
        ctx.cancel()

        with pytest.raises(OperationCancelled):
            redis.start(ctx)

        assert events == []


class TestRedisStop:
    """Tests for stopping Redis."""

    def test_stop_running(self, service_config, make_supervisor, clock, events):
        """Test a running unit is stopped and the grace period observed."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        redis.stop()

        assert events == [("terminate", "redis")]
        assert clock.sleeps == [2.0]

    def test_stop_is_idempotent(self, redis, events):
        """Test stopping a stopped unit does nothing."""
        redis.stop()
        redis.stop()

        assert events == []

    def test_stop_failure(self, service_config, make_supervisor, clock):
        """Test a failed stop raises StopFailed."""
        supervisor = make_supervisor(running={"redis"}, fail_terminate={"redis"})
        redis = RedisService(service_config, supervisor=supervisor, clock=clock)

        with pytest.raises(StopFailed):
            redis.stop()

    def test_restart(self, service_config, make_supervisor, clock, events):
        """Test restart stops, settles one second, then starts."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        redis.restart()

        assert events == [("terminate", "redis"), ("launch", "redis"), ("enable", "redis")]
        assert clock.sleeps == [2.0, 1.0, 2.0]


class TestRedisHealth:
    """Tests for Redis health and status."""

    def test_inactive_unit(self, redis):
        """Test an inactive unit is unhealthy."""
        with pytest.raises(ServiceInactive, match="inactive"):
            redis.health_check()

    def test_ping_failure(self, service_config, make_supervisor, clock):
        """Test a non-PONG answer is unhealthy."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        with patch.object(RedisService, "ping", return_value="NOAUTH Authentication required."):
            with pytest.raises(PingFailed, match="NOAUTH"):
                redis.health_check()

    def test_healthy(self, service_config, make_supervisor, clock):
        """Test an active unit answering PONG is healthy."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        with patch.object(RedisService, "ping", return_value="PONG"):
            redis.health_check()

    def test_ping_command_line(self, service_config, supervisor, clock):
        """Test ping addresses the configured host and port and passes the password by environment."""
        config = dataclasses.replace(service_config, redis_addr="10.0.0.5:6380", redis_password="s3cret")
        redis = RedisService(config, supervisor=supervisor, clock=clock)

        with patch("convoy.services.redis.run_command") as mock_run:
            mock_run.return_value = SupervisorResult(success=True, message="PONG", stdout="PONG\n")
            assert redis.ping() == "PONG"

        mock_run.assert_called_once_with(
            "redis-cli", "-h", "10.0.0.5", "-p", "6380", "ping", timeout=5.0, env={"REDISCLI_AUTH": "s3cret"}
        )
        assert "s3cret" not in mock_run.call_args.args

    def test_ping_without_password(self, service_config, supervisor, clock):
        """Test ping without a password leaves the environment untouched."""
        redis = RedisService(service_config, supervisor=supervisor, clock=clock)

        with patch("convoy.services.redis.run_command") as mock_run:
            mock_run.return_value = SupervisorResult(success=True, message="PONG", stdout="PONG\n")
            redis.ping()

        assert mock_run.call_args.kwargs["env"] is None

    def test_status_when_cli_not_executable(self, service_config, make_supervisor, clock, tmp_path):
        """Test status reports an unrunnable redis-cli instead of raising."""
        config = dataclasses.replace(service_config, redis_cli=str(tmp_path))
        redis = RedisService(config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        status = redis.get_status()

        assert status.running is True
        assert status.healthy is False
        assert status.errors[0].startswith("redis: unexpected ping response")
        assert "could not be executed" in status.errors[0]

    def test_status_healthy(self, service_config, make_supervisor, clock):
        """Test status of a healthy unit carries pid and last_seen."""
        redis = RedisService(service_config, supervisor=make_supervisor(running={"redis"}), clock=clock)

        with patch.object(RedisService, "ping", return_value="PONG"), patch(
            "convoy.probes.find_pid", return_value=1234
        ):
            status = redis.get_status()

        assert status.running is True
        assert status.healthy is True
        assert status.pid == 1234
        assert status.ports == [6379]
        assert status.last_seen == clock.now()

    def test_status_stopped(self, redis):
        """Test status of a stopped unit never claims health."""
        status = redis.get_status()

        assert status.running is False
        assert status.healthy is False
        assert status.errors == ["redis: service manager reports 'inactive'"]
