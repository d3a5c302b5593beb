from pathlib import Path

import pytest

from repogen.domain.models.manifest import Manifest
from repogen.domain.models.project_spec import ProjectSpec
from repogen.domain.providers.provider_factory import ProviderFactory


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Prevent tests from reading the developer's ~/.repogen/config.yml."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def _restore_provider_registry():
    """Snapshot the provider registry so tests can register fakes freely."""
    original_registry = dict(ProviderFactory._registry)

    yield

    ProviderFactory._registry.clear()
    ProviderFactory._registry.update(original_registry)


@pytest.fixture
def abc_manifest() -> Manifest:
    """a.ts <- b.ts <- c.ts (c also depends on a)."""
    return Manifest.model_validate(
        {
            "files": [
                {"path": "a.ts", "description": "base module", "dependsOn": []},
                {"path": "b.ts", "description": "uses a", "dependsOn": ["a.ts"]},
                {"path": "c.ts", "description": "uses a and b", "dependsOn": ["b.ts", "a.ts"]},
            ]
        }
    )


@pytest.fixture
def project_spec() -> ProjectSpec:
    return ProjectSpec.model_validate(
        {
            "projectName": "Todo Service",
            "projectDescription": "A small todo list API",
            "technologyStack": {"backend": ["Node.js", "Express"], "database": ["SQLite"]},
            "coreFeatures": [
                {"name": "Create todo", "description": "POST /todos", "priority": "High"}
            ],
            "authentication": "jwt",
            "apiRequirements": ["REST", "JSON"],
        }
    )
