from typing import Any, Callable
from unittest.mock import MagicMock, PropertyMock

import pytest

from tests.cleanup.constants import NAMESPACE
from vm_import.temporary_resources import TemporaryResources


@pytest.fixture()
def fake_resource() -> Callable[..., MagicMock]:
    """
    Build a resource mock whose `exists` returns the given samples in order.

    The last sample is repeated once the list is exhausted.
    """

    def _fake_resource(name: str, exists_samples: list[Any]) -> MagicMock:
        resource = MagicMock()
        resource.name = name
        resource.namespace = NAMESPACE
        samples = iter(exists_samples)
        last: dict[str, Any] = {}

        def _exists() -> Any:
            last["value"] = next(samples, last.get("value"))
            return last["value"]

        type(resource).exists = PropertyMock(side_effect=_exists)
        return resource

    return _fake_resource


@pytest.fixture()
def patch_temporary_resources(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[list[TemporaryResources]], list[dict[str, Any]]]:
    """
    Patch the temporary resources lookup to return the given samples in order.

    Returns the list of keyword arguments of every lookup call.
    """

    def _patch(samples: list[TemporaryResources]) -> list[dict[str, Any]]:
        calls: list[dict[str, Any]] = []
        samples_iter = iter(samples)

        def _get_import_temporary_resources(**kwargs: Any) -> TemporaryResources:
            calls.append(kwargs)
            return next(samples_iter, samples[-1])

        monkeypatch.setattr("vm_import.cleanup.get_import_temporary_resources", _get_import_temporary_resources)
        return calls

    return _patch
