from typing import Any
from unittest.mock import MagicMock

import pytest
from ocp_resources.resource import Resource

from tests.resources.constants import V2V_API_VERSION


@pytest.fixture()
def v2v_client() -> MagicMock:
    client = MagicMock()
    api_version = V2V_API_VERSION.split("/")[1]
    client.resources.search.return_value = [MagicMock(api_version=api_version, group_version=V2V_API_VERSION)]
    return client


@pytest.fixture()
def render_on_deploy(monkeypatch: pytest.MonkeyPatch) -> None:
    def _deploy(self: Resource, wait: bool = False) -> Any:
        self.to_dict()
        return self

    monkeypatch.setattr(Resource, "deploy", _deploy)
