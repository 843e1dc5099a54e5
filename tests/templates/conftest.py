import copy
from typing import Any
from unittest.mock import MagicMock

import pytest

from tests.templates.constants import PROCESSED_TEMPLATE, RHEL8_SERVER_TEMPLATE
from vm_import.templates import TemplateProvider


@pytest.fixture()
def template_client() -> MagicMock:
    client = MagicMock()
    client.create.return_value.to_dict.return_value = copy.deepcopy(PROCESSED_TEMPLATE)
    return client


@pytest.fixture()
def template_provider(template_client: MagicMock) -> TemplateProvider:
    return TemplateProvider(client=template_client)


@pytest.fixture()
def rhel8_template_body() -> dict[str, Any]:
    return copy.deepcopy(RHEL8_SERVER_TEMPLATE)
