"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from checkvault.core.config import ChecklistConfig, Config, VaultConfig
from checkvault.services import ChecklistService

from tests.fakes import InMemoryVault


@pytest.fixture
def vault() -> InMemoryVault:
    """Provide an empty in-memory vault."""
    return InMemoryVault()


@pytest.fixture
def service(vault: InMemoryVault) -> ChecklistService:
    """Provide a ChecklistService backed by the in-memory vault."""
    return ChecklistService(documents=vault, contents=vault, tags=vault)


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Provide an empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def config(vault_dir: Path, tmp_path: Path) -> Config:
    """Provide a Config pointing at the temporary vault and settings file."""
    return Config(
        settings_path=tmp_path / "settings.yaml",
        vault=VaultConfig(path=vault_dir),
        checklist=ChecklistConfig(),
    )
