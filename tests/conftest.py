"""Configuration pytest: harnais de tests avec sécurité.

Active:
- Blocage subprocess (sécurité: jamais de vrai update-grub)
- Loguru stabilisé (pas d'enqueue)
"""

import subprocess
import sys
from pathlib import Path

# Ajouter le dossier racine du projet au PYTHONPATH
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from loguru import logger


def pytest_configure(config):
    """Configuration globale de pytest."""
    del config
    # Stabiliser Loguru pendant les tests: pas d'enqueue (thread/queue) pour éviter
    # des crashes lors du shutdown Python/GC.
    logger.remove()
    logger.add(sys.stderr, enqueue=False)


@pytest.fixture(autouse=True)
def secure_subprocess(monkeypatch):
    """Empêche les appels subprocess réels pendant les tests."""

    def mocked_run(*args, **kwargs):
        cmd = args[0] if args else kwargs.get("args")
        raise RuntimeError(f"SÉCURITÉ : Appel subprocess non autorisé dans les tests : {cmd}")

    monkeypatch.setattr(subprocess, "run", mocked_run)
    monkeypatch.setattr(subprocess, "Popen", mocked_run)
    monkeypatch.setattr(subprocess, "call", mocked_run)
    monkeypatch.setattr(subprocess, "check_call", mocked_run)
    monkeypatch.setattr(subprocess, "check_output", mocked_run)

    yield


@pytest.fixture
def grub_file(tmp_path):
    """Fabrique un faux /etc/default/grub sous tmp_path."""

    def _make(content: str) -> Path:
        path = tmp_path / "grub"
        path.write_bytes(content.encode("utf-8"))
        return path

    return _make


def pytest_sessionfinish(session, exitstatus):
    """Arrête proprement les handlers Loguru en fin de session."""
    del session, exitstatus
    logger.complete()
    logger.remove()
