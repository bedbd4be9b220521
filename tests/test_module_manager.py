"""
Тесты для ModuleManager.
"""

from types import SimpleNamespace

import pytest

from core.module_manager import ModuleManager, REQUIRED_MODULES
from core.runtime_module import RuntimeModule


class DummyModule(RuntimeModule):
    """Тестовый модуль для проверки ModuleManager."""

    def __init__(self, runtime, name="test", fail_start=False, fail_stop=False):
        super().__init__(runtime)
        self._name = name
        self._fail_start = fail_start
        self._fail_stop = fail_stop
        self.registered = 0
        self.started = False
        self.stopped = False

    @property
    def name(self) -> str:
        return self._name

    async def register(self) -> None:
        self.registered += 1

    async def start(self) -> None:
        if self._fail_start:
            raise RuntimeError("start failed")
        self.started = True

    async def stop(self) -> None:
        if self._fail_stop:
            raise RuntimeError("stop failed")
        self.stopped = True


@pytest.mark.asyncio
async def test_register_module():
    """Тест регистрации модуля."""
    manager = ModuleManager()
    module = DummyModule(object(), "test_module")

    await manager.register(module)

    assert "test_module" in manager.list_modules()
    assert manager.get_module("test_module") is module
    assert module.registered == 1


@pytest.mark.asyncio
async def test_register_duplicate_raises():
    manager = ModuleManager()
    await manager.register(DummyModule(object(), "test"))

    with pytest.raises(ValueError, match="already registered"):
        await manager.register(DummyModule(object(), "test"))


@pytest.mark.asyncio
async def test_register_idempotent():
    """Повторная регистрация того же экземпляра игнорируется."""
    manager = ModuleManager()
    module = DummyModule(object(), "test")

    await manager.register(module)
    await manager.register(module)

    assert manager.list_modules() == ["test"]
    assert module.registered == 1


@pytest.mark.asyncio
async def test_unregister_module():
    manager = ModuleManager()
    await manager.register(DummyModule(object(), "test"))

    manager.unregister("test")
    manager.unregister("missing")

    assert manager.get_module("test") is None


@pytest.mark.asyncio
async def test_start_and_stop_all():
    manager = ModuleManager()
    a = DummyModule(object(), "a")
    b = DummyModule(object(), "b")
    await manager.register(a)
    await manager.register(b)

    await manager.start_all()
    assert a.started and b.started

    await manager.stop_all()
    assert a.stopped and b.stopped


@pytest.mark.asyncio
async def test_required_module_start_failure_raises():
    manager = ModuleManager()
    await manager.register(DummyModule(object(), REQUIRED_MODULES[0], fail_start=True))

    with pytest.raises(RuntimeError, match="Failed to start required modules"):
        await manager.start_all()


@pytest.mark.asyncio
async def test_optional_module_start_failure_is_logged(capsys):
    manager = ModuleManager()
    ok = DummyModule(object(), "ok")
    await manager.register(DummyModule(object(), "optional_thing", fail_start=True))
    await manager.register(ok)

    await manager.start_all()

    assert ok.started
    assert "optional_thing" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_stop_all_continues_after_error():
    manager = ModuleManager()
    broken = DummyModule(object(), "broken", fail_stop=True)
    ok = DummyModule(object(), "ok")
    await manager.register(ok)
    await manager.register(broken)

    await manager.stop_all()

    assert ok.stopped


@pytest.mark.asyncio
async def test_check_required_modules_registered():
    manager = ModuleManager()
    with pytest.raises(RuntimeError, match="Required modules not registered"):
        manager.check_required_modules_registered()


@pytest.mark.asyncio
async def test_register_builtin_modules_skips_registered(config):
    from core.runtime import CoreRuntime

    runtime = CoreRuntime(config)
    fake_api = DummyModule(runtime, "api")
    await runtime.module_manager.register(fake_api)

    await runtime.module_manager.register_builtin_modules(runtime)

    assert runtime.module_manager.list_modules() == ["api", "logger", "diagnostics"]
    assert runtime.module_manager.get_module("api") is fake_api
    runtime.module_manager.check_required_modules_registered()


@pytest.mark.asyncio
async def test_discover_unknown_module_returns_none():
    manager = ModuleManager(SimpleNamespace())
    assert manager._discover_module("does_not_exist") is None
