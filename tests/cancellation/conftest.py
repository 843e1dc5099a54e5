from pathlib import Path
from typing import Any, Generator

import pytest
from kubernetes.dynamic import DynamicClient
from ocp_resources.datavolume import DataVolume
from ocp_resources.namespace import Namespace
from ocp_resources.secret import Secret
from ocp_resources.virtual_machine import VirtualMachine
from pytest_testconfig import config as py_config
from simple_logger.logger import get_logger

from tests.cancellation.constants import BASIC_VM_IMPORT_NAME, OVIRT_SECRET_NAME, TARGET_VM_NAME
from vm_import.infra import (
    create_ovirt_secret,
    create_vm_import,
    get_vm_data_volume_name,
    wait_for_resource_to_exist,
    wait_for_vm_import_processing,
)
from vm_import.resources.virtual_machine_import import VirtualMachineImport

LOGGER = get_logger(name=__name__)


@pytest.fixture(scope="class")
def ovirt_secret(admin_client: DynamicClient, vm_import_namespace: Namespace) -> Generator[Secret, Any, Any]:
    ca_cert_file = py_config["ovirt_ca_cert_file"]
    ca_cert = Path(ca_cert_file).read_text() if ca_cert_file else ""

    with create_ovirt_secret(
        client=admin_client,
        name=OVIRT_SECRET_NAME,
        namespace=vm_import_namespace.name,
        api_url=py_config["ovirt_api_url"],
        username=py_config["ovirt_username"],
        password=py_config["ovirt_password"],
        ca_cert=ca_cert,
    ) as secret:
        yield secret


@pytest.fixture(scope="class")
def processing_vm_import(
    admin_client: DynamicClient,
    vm_import_namespace: Namespace,
    ovirt_secret: Secret,
) -> Generator[VirtualMachineImport, Any, Any]:
    # Deleted by the test itself
    with create_vm_import(
        client=admin_client,
        name=BASIC_VM_IMPORT_NAME,
        namespace=vm_import_namespace.name,
        vm_id=py_config["ovirt_basic_vm_id"],
        secret_name=ovirt_secret.name,
        target_vm_name=TARGET_VM_NAME,
        start_vm=True,
        teardown=False,
    ) as vm_import:
        wait_for_vm_import_processing(vm_import=vm_import)
        yield vm_import


@pytest.fixture(scope="class")
def imported_virtual_machine(
    admin_client: DynamicClient, processing_vm_import: VirtualMachineImport
) -> VirtualMachine:
    virtual_machine = VirtualMachine(
        client=admin_client,
        name=TARGET_VM_NAME,
        namespace=processing_vm_import.namespace,
    )
    wait_for_resource_to_exist(resource=virtual_machine)
    return virtual_machine


@pytest.fixture(scope="class")
def imported_data_volume(admin_client: DynamicClient, imported_virtual_machine: VirtualMachine) -> DataVolume:
    data_volume = DataVolume(
        client=admin_client,
        name=get_vm_data_volume_name(virtual_machine=imported_virtual_machine),
        namespace=imported_virtual_machine.namespace,
    )
    LOGGER.info(f"VirtualMachine {imported_virtual_machine.name} is backed by DataVolume {data_volume.name}")
    wait_for_resource_to_exist(resource=data_volume)
    return data_volume
