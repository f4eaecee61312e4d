"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cglue.domain.models.entities import Namespace
from cglue.domain.services.parsing import TextParser
from cglue.domain.services.specializations import register_std_types
from cglue.infrastructure.config import ModelConfig

SHAPES_DECLARATIONS = """\
const PI_INT 3
class Shape
Shape.area double
Shape.name c_string
class Circle : Shape
 double radius /RW
Circle.Circle
 double radius 1.0
Circle.area double
Circle.scale void
 double factor
"""


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def root() -> Namespace:
    """Fresh root scope with the builtin types."""
    return Namespace.create_root()


@pytest.fixture
def std_root(root: Namespace) -> Namespace:
    """Root scope with std::vector, std::map and std::string registered."""
    register_std_types(root)
    return root


@pytest.fixture
def parser(std_root: Namespace) -> TextParser:
    """Text front end parsing into ``std_root``."""
    return TextParser(std_root)


@pytest.fixture
def model_config() -> ModelConfig:
    """Model configuration with a non-default export prefix."""
    return ModelConfig(cprefix="ocv_")


@pytest.fixture
def shapes_file(tmp_path: Path) -> Path:
    """Declaration file with a small class hierarchy."""
    path = tmp_path / "shapes.txt"
    path.write_text(SHAPES_DECLARATIONS, encoding="utf-8")
    return path
