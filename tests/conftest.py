import pytest

from pixel_studio.logging_setup import configure_logging
from pixel_studio.models import Document
from pixel_studio.services.editor_session import EditorSession


configure_logging(env="test", level="WARNING")


@pytest.fixture
def doc() -> Document:
    """An 8x8 document with a single empty layer."""
    return Document.create(8)


@pytest.fixture
def session() -> EditorSession:
    return EditorSession(grid_size=8)
