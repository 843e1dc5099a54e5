from unittest.mock import MagicMock


def resource_mock(name: str) -> MagicMock:
    resource = MagicMock()
    resource.name = name
    return resource
