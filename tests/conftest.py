"""
Test Configuration
==================

Pytest configuration with shared fixtures: testing settings, temporary
directories, sample declarative definitions and ready-made pages.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator
from unittest.mock import patch

import pytest
import yaml
from pydantic_settings import SettingsConfigDict

import widgetry.config.settings as settings_module
from widgetry.config.settings import Settings
from widgetry.core import inputs, layouts, outputs
from widgetry.core.tags import Tag
from widgetry.models.schemas import RenderOptions

from tests.utils.data_generators import UIDataGenerator


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    pretty_print: bool = True

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="WIDGETRY_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Install testing settings as the global settings for every test."""
    with patch.object(settings_module, "settings", test_settings):
        yield test_settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp(prefix="widgetry_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_ui_dict() -> Dict[str, Any]:
    """Sidebar page with one input of each common kind and matching outputs."""
    return UIDataGenerator.generate_sidebar_app()


@pytest.fixture
def sample_ui_json(sample_ui_dict: Dict[str, Any]) -> str:
    """Sample JSON UI definition."""
    return json.dumps(sample_ui_dict, indent=2)


@pytest.fixture
def sample_ui_yaml(sample_ui_dict: Dict[str, Any]) -> str:
    """Sample YAML UI definition."""
    return yaml.dump(sample_ui_dict, default_flow_style=False, sort_keys=False)


@pytest.fixture
def sample_page() -> Tag:
    """Fluid page with a sidebar layout, built directly from constructors."""
    return layouts.fluid_page(
        layouts.title_panel("Hello Shiny!"),
        layouts.sidebar_layout(
            layouts.sidebar_panel(
                inputs.slider_input("obs", "Number of observations:", min=1, max=1000, value=500),
                inputs.select_input("dist", "Distribution:", ["norm", "unif", "lnorm"]),
            ),
            layouts.main_panel(
                outputs.plot_output("dist_plot"),
                outputs.verbatim_text_output("summary"),
                outputs.table_output("view"),
            ),
        ),
    )


@pytest.fixture
def render_options() -> RenderOptions:
    """Default document rendering options."""
    return RenderOptions()


# Test markers
def pytest_configure(config: Any) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: fast tests without external services")
    config.addinivalue_line("markers", "integration: tests combining several modules")
