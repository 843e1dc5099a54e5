from typing import Any, Generator

import pytest
import shortuuid
from kubernetes.dynamic import DynamicClient
from ocp_resources.namespace import Namespace
from ocp_resources.resource import get_client
from pytest import Config, Item, Parser
from pytest_testconfig import config as py_config
from simple_logger.logger import get_logger

from vm_import.infra import create_ns

LOGGER = get_logger(name=__name__)


def pytest_addoption(parser: Parser) -> None:
    parser.addoption(
        "--cluster-tests",
        action="store_true",
        default=False,
        help="Run end to end tests against the cluster in KUBECONFIG",
    )
    parser.addoption(
        "--skip-teardown",
        action="store_true",
        default=False,
        help="Keep the resources created by cluster tests",
    )


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    if config.getoption("--cluster-tests"):
        return

    skip_cluster = pytest.mark.skip(reason="needs --cluster-tests")
    for item in items:
        if "cluster" in item.keywords:
            item.add_marker(skip_cluster)


@pytest.fixture(scope="session")
def admin_client() -> DynamicClient:
    return get_client()


@pytest.fixture(scope="session")
def teardown_resources(pytestconfig: Config) -> bool:
    return not pytestconfig.option.skip_teardown


@pytest.fixture(scope="class")
def vm_import_namespace(
    admin_client: DynamicClient, teardown_resources: bool
) -> Generator[Namespace, Any, Any]:
    with create_ns(
        client=admin_client,
        name=f"{py_config['namespace_prefix']}-{shortuuid.uuid().lower()[:8]}",
        teardown=teardown_resources,
    ) as ns:
        LOGGER.info(f"Created namespace {ns.name}")
        yield ns
