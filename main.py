"""
Точка входа в Runtime.

Минимальный main: конфигурация из окружения, запуск, ожидание сигнала.
"""

import asyncio
import signal

from core.config import Config
from core.runtime import CoreRuntime


async def main():
    """Главная функция запуска Runtime."""

    config = Config.from_env()
    runtime = CoreRuntime(config)

    shutdown_event = asyncio.Event()

    def signal_handler():
        """Обработчик сигналов остановки."""
        print("\n[Runtime] Получен сигнал остановки...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    try:
        print("[Runtime] Запуск Runtime...")
        await runtime.start()
        print(f"[Runtime] Runtime запущен: http://{config.http_host}:{config.http_port}{config.http_prefix}/")

        await shutdown_event.wait()

    finally:
        print("[Runtime] Остановка Runtime...")
        try:
            await asyncio.wait_for(
                runtime.shutdown(),
                timeout=config.shutdown_timeout
            )
            print("[Runtime] Runtime остановлен")
        except asyncio.TimeoutError:
            print("[Runtime] Таймаут при остановке Runtime")


if __name__ == "__main__":
    asyncio.run(main())
