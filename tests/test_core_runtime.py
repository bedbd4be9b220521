import pytest

from core.config import Config
from core.index_registry import IndexPageContent
from core.runtime import CoreRuntime


@pytest.mark.asyncio
async def test_core_start_stop_shutdown(config):
    runtime = CoreRuntime(config)
    assert runtime.is_running is False

    await runtime.start()
    assert runtime.is_running is True
    assert runtime.module_manager.list_modules() == ["logger", "diagnostics", "api"]

    await runtime.stop()
    assert runtime.is_running is False

    await runtime.shutdown()
    assert await runtime.service_registry.list_services() == []
    assert runtime.module_manager.list_modules() == []


@pytest.mark.asyncio
async def test_start_is_idempotent(config):
    runtime = CoreRuntime(config)
    await runtime.start()
    await runtime.start()
    assert runtime.module_manager.list_modules() == ["logger", "diagnostics", "api"]
    await runtime.stop()


def test_runtime_owns_its_index():
    first = CoreRuntime(Config(http_enabled=False))
    second = CoreRuntime(Config(http_enabled=False))

    assert isinstance(first.index, IndexPageContent)
    first.index.add_link("s", "/p", "d")
    assert second.index.get_content() == {}


def test_default_config_is_fresh():
    runtime = CoreRuntime(Config(http_enabled=False, http_port=9000))
    assert runtime.config.http_port == 9000
    assert runtime.default_config == Config()
    assert runtime.default_config is not runtime.default_config


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        CoreRuntime(Config(http_port=-1))


@pytest.mark.asyncio
async def test_health_check(config):
    runtime = CoreRuntime(config)
    assert (await runtime.health_check())["status"] == "stopped"

    await runtime.start()
    health = await runtime.health_check()

    assert health["status"] == "ok"
    assert health["uptime"] >= 0
    assert health["runtime_config_loaded"] is False

    await runtime.stop()
