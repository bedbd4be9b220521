import sys
import pathlib
import pytest

# Ensure repository root is on sys.path so packages (core, modules) import correctly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import Config


@pytest.fixture
def config():
    """Конфигурация без запуска uvicorn."""
    return Config(http_enabled=False, service_name="Test Service")


@pytest.fixture
def runtime_config_file(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("overrides:\n  tenant-a:\n    ingestion_rate: 100\n", encoding="utf-8")
    return path
