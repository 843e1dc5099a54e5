from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Optional

import yaml
from kubernetes.dynamic import DynamicClient
from ocp_resources.namespace import Namespace
from ocp_resources.resource import NamespacedResource
from ocp_resources.secret import Secret
from ocp_resources.virtual_machine import VirtualMachine
from simple_logger.logger import get_logger
from timeout_sampler import TimeoutExpiredError

from vm_import.constants import OvirtSecret, Timeout
from vm_import.exceptions import DataVolumeNotFoundError
from vm_import.resources.resource_mapping import ResourceMapping
from vm_import.resources.virtual_machine_import import VirtualMachineImport

LOGGER = get_logger(name=__name__)


@contextmanager
def create_ns(
    client: DynamicClient,
    name: str,
    teardown: bool = True,
    delete_timeout: int = 4 * 60,
    labels: Optional[dict[str, str]] = None,
) -> Generator[Namespace, Any, Any]:
    """
    Create namespace.

    Args:
        client (DynamicClient): admin client.
        name (str): namespace name.
        teardown (bool): should run resource teardown
        delete_timeout (int): delete timeout.
        labels (dict[str, str]): labels dict to set for namespace

    Yields:
        Namespace: namespace

    """
    with Namespace(
        client=client,
        name=name,
        label=labels,
        teardown=teardown,
        delete_timeout=delete_timeout,
    ) as ns:
        ns.wait_for_status(status=Namespace.Status.ACTIVE, timeout=Timeout.TIMEOUT_2MIN)
        yield ns


@contextmanager
def create_ovirt_secret(
    client: DynamicClient,
    name: str,
    namespace: str,
    api_url: str,
    username: str,
    password: str,
    ca_cert: str,
) -> Generator[Secret, Any, Any]:
    """
    Create the provider credentials Secret referenced by a VirtualMachineImport.

    Args:
        client (DynamicClient): Dynamic client.
        name (str): Secret name.
        namespace (str): Secret namespace name.
        api_url (str): oVirt engine API URL.
        username (str): oVirt user.
        password (str): oVirt password.
        ca_cert (str): oVirt engine CA certificate (PEM).

    Yield:
        Secret: Secret object

    """
    ovirt_credentials = {
        "apiUrl": api_url,
        "username": username,
        "password": password,
        "caCert": ca_cert,
    }

    with Secret(
        client=client,
        name=name,
        namespace=namespace,
        string_data={OvirtSecret.KEY: yaml.safe_dump(ovirt_credentials)},
    ) as secret:
        yield secret


@contextmanager
def create_resource_mapping(
    client: DynamicClient,
    name: str,
    namespace: str,
    ovirt_mappings: dict[str, Any],
    teardown: bool = True,
) -> Generator[ResourceMapping, Any, Any]:
    """
    Context manager to create and optionally delete a ResourceMapping.
    """
    with ResourceMapping(
        client=client,
        name=name,
        namespace=namespace,
        ovirt_mappings=ovirt_mappings,
        teardown=teardown,
    ) as resource_mapping:
        yield resource_mapping


def virtual_machine_import_spec(
    vm_id: str,
    secret_name: str,
    namespace: str,
    target_vm_name: str,
    start_vm: bool = True,
    resource_mapping_name: Optional[str] = None,
) -> dict[str, Any]:
    """
    Build the VirtualMachineImport spec arguments for an oVirt VM.

    Args:
        vm_id (str): oVirt VM id
        secret_name (str): provider credentials Secret name
        namespace (str): namespace of the Secret and ResourceMapping
        target_vm_name (str): name of the VirtualMachine to create
        start_vm (bool): start the VirtualMachine after the import
        resource_mapping_name (str): ResourceMapping name

    Returns:
        dict[str, Any]: VirtualMachineImport keyword arguments

    """
    vmi_kwargs: dict[str, Any] = {
        "provider_credentials_secret": {"name": secret_name, "namespace": namespace},
        "source": {"ovirt": {"vm": {"id": vm_id}}},
        "target_vm_name": target_vm_name,
        "start_vm": start_vm,
    }

    if resource_mapping_name:
        vmi_kwargs["resource_mapping"] = {"name": resource_mapping_name, "namespace": namespace}

    return vmi_kwargs


@contextmanager
def create_vm_import(
    client: DynamicClient,
    name: str,
    namespace: str,
    vm_id: str,
    secret_name: str,
    target_vm_name: str,
    start_vm: bool = True,
    resource_mapping_name: Optional[str] = None,
    teardown: bool = True,
) -> Generator[VirtualMachineImport, Any, Any]:
    """
    Create VirtualMachineImport object.

    Args:
        client (DynamicClient): DynamicClient object
        name (str): VirtualMachineImport name
        namespace (str): Namespace name
        vm_id (str): oVirt VM id
        secret_name (str): provider credentials Secret name
        target_vm_name (str): name of the VirtualMachine to create
        start_vm (bool): start the VirtualMachine after the import
        resource_mapping_name (str): ResourceMapping name
        teardown (bool): should run resource teardown

    Yields:
        VirtualMachineImport: VirtualMachineImport object

    """
    with VirtualMachineImport(
        client=client,
        name=name,
        namespace=namespace,
        teardown=teardown,
        **virtual_machine_import_spec(
            vm_id=vm_id,
            secret_name=secret_name,
            namespace=namespace,
            target_vm_name=target_vm_name,
            start_vm=start_vm,
            resource_mapping_name=resource_mapping_name,
        ),
    ) as vm_import:
        yield vm_import


def wait_for_vm_import_processing(vm_import: VirtualMachineImport, timeout: int = Timeout.TIMEOUT_5MIN) -> None:
    LOGGER.info(f"Waiting for VirtualMachineImport {vm_import.name} to start processing")
    vm_import.wait_for_condition(
        condition=vm_import.Condition.PROCESSING,
        status=vm_import.Condition.Status.TRUE,
        timeout=timeout,
    )


def wait_for_resource_to_exist(
    resource: NamespacedResource,
    timeout: int = Timeout.TIMEOUT_5MIN,
    sleep: int = Timeout.TIMEOUT_1SEC,
) -> None:
    """
    Wait for a resource created by someone else (e.g. the import controller) to exist.

    Args:
        resource (NamespacedResource): resource to wait for
        timeout (int): timeout in seconds
        sleep (int): seconds between checks

    Raises:
        TimeoutExpiredError: if the resource does not exist after `timeout`

    """
    try:
        resource.wait(timeout=timeout, sleep=sleep)

    except TimeoutExpiredError:
        LOGGER.error(f"{resource.name} does not exist in namespace {resource.namespace} after {timeout} seconds")
        raise


def get_vm_data_volume_name(virtual_machine: VirtualMachine) -> str:
    """
    Get the name of the DataVolume backing a VirtualMachine.

    Args:
        virtual_machine (VirtualMachine): VirtualMachine object

    Returns:
        str: name of the first DataVolume volume

    Raises:
        DataVolumeNotFoundError: if no volume is backed by a DataVolume

    """
    for volume in virtual_machine.instance.spec.template.spec.volumes or []:
        if data_volume := volume.get("dataVolume"):
            return data_volume["name"]

    raise DataVolumeNotFoundError(vm_name=virtual_machine.name)
