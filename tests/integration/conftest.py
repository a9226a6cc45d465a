from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from app.api.application import create_app
from app.config.settings import Settings
from app.processor.processor import Processor


@pytest.fixture()
def make_client() -> Callable[[Processor], TestClient]:
    """Build a TestClient around the given processor."""

    def _make(processor: Processor) -> TestClient:
        app = create_app(Settings(analysis_provider="example"), processor=processor)
        return TestClient(app)

    return _make
