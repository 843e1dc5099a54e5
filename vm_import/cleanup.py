from typing import Any

from kubernetes.dynamic import DynamicClient
from ocp_resources.resource import NamespacedResource
from simple_logger.logger import get_logger
from timeout_sampler import TimeoutExpiredError, TimeoutSampler

from vm_import.constants import PropagationPolicy, Timeout
from vm_import.exceptions import InvalidPropagationPolicyError
from vm_import.temporary_resources import TemporaryResources, get_import_temporary_resources

LOGGER = get_logger(name=__name__)


def delete_vm_import(
    vm_import: NamespacedResource,
    propagation_policy: str = PropagationPolicy.FOREGROUND,
) -> None:
    """
    Request deletion of a VirtualMachineImport.

    The call returns once the API server accepted the request; dependents are removed
    asynchronously.

    Args:
        vm_import (NamespacedResource): VirtualMachineImport object
        propagation_policy (str): Foreground, Background or Orphan

    Raises:
        InvalidPropagationPolicyError: if the propagation policy is unknown

    """
    if propagation_policy not in PropagationPolicy.ALL:
        raise InvalidPropagationPolicyError(propagation_policy=propagation_policy)

    LOGGER.info(f"Deleting VirtualMachineImport {vm_import.name} with {propagation_policy} propagation")
    vm_import.api.delete(
        name=vm_import.name,
        namespace=vm_import.namespace,
        body={"apiVersion": "v1", "kind": "DeleteOptions", "propagationPolicy": propagation_policy},
    )


def wait_for_resource_deletion(
    resource: NamespacedResource,
    timeout: int = Timeout.TIMEOUT_2MIN,
    sleep: float = Timeout.TIMEOUT_1SEC,
) -> None:
    """
    Wait until a resource no longer exists.

    Unlike `Resource.wait_deleted`, which returns False on timeout with a fixed one second
    sleep, this raises so a lingering resource fails the caller.

    Args:
        resource (NamespacedResource): resource to wait for
        timeout (int): timeout in seconds
        sleep (float): seconds between checks

    Raises:
        TimeoutExpiredError: if the resource still exists after `timeout`

    """
    LOGGER.info(f"Waiting for {resource.name} to be deleted")
    try:
        for sample in TimeoutSampler(
            wait_timeout=timeout,
            sleep=sleep,
            func=lambda: resource.exists,
        ):
            if not sample:
                return

    except TimeoutExpiredError:
        LOGGER.error(f"{resource.name} in namespace {resource.namespace} still exists after {timeout} seconds")
        raise


def wait_for_temporary_resources_deletion(
    client: DynamicClient,
    namespace: str,
    import_name: str,
    timeout: int = Timeout.TIMEOUT_2MIN,
    sleep: float = Timeout.TIMEOUT_1SEC,
) -> None:
    """
    Wait until no temporary ConfigMap or Secret is labelled for the import.

    Args:
        client (DynamicClient): DynamicClient object
        namespace (str): import namespace
        import_name (str): VirtualMachineImport name
        timeout (int): timeout in seconds
        sleep (float): seconds between checks

    Raises:
        TimeoutExpiredError: if temporary resources still exist after `timeout`

    """
    sample: TemporaryResources | None = None

    LOGGER.info(f"Waiting for temporary resources of import {import_name} to be deleted")
    try:
        for sample in TimeoutSampler(
            wait_timeout=timeout,
            sleep=sleep,
            func=get_import_temporary_resources,
            client=client,
            namespace=namespace,
            import_name=import_name,
        ):
            if sample.config_map is None and sample.secret is None:
                return

    except TimeoutExpiredError:
        LOGGER.error(f"Temporary resources of import {import_name} were not deleted. Last sample:\n{sample}")
        raise


def verify_vm_import_cascade_cleanup(
    client: DynamicClient,
    vm_import: NamespacedResource,
    virtual_machine: NamespacedResource,
    data_volume: NamespacedResource,
    timeout: int = Timeout.TIMEOUT_2MIN,
    sleep: float = Timeout.TIMEOUT_1SEC,
) -> None:
    """
    Verify everything an import produced is gone after the import was deleted.

    Checks, in order: the import itself, its temporary ConfigMap and Secret, the
    DataVolume and the VirtualMachine. Each check gets its own `timeout`.

    Args:
        client (DynamicClient): DynamicClient object
        vm_import (NamespacedResource): deleted VirtualMachineImport
        virtual_machine (NamespacedResource): VirtualMachine created by the import
        data_volume (NamespacedResource): DataVolume backing the VirtualMachine
        timeout (int): timeout in seconds for each check
        sleep (float): seconds between checks

    Raises:
        TimeoutExpiredError: if any of the resources still exists after `timeout`

    """
    wait_kwargs: dict[str, Any] = {"timeout": timeout, "sleep": sleep}

    wait_for_resource_deletion(resource=vm_import, **wait_kwargs)
    wait_for_temporary_resources_deletion(
        client=client,
        namespace=vm_import.namespace,
        import_name=vm_import.name,
        **wait_kwargs,
    )
    wait_for_resource_deletion(resource=data_volume, **wait_kwargs)
    wait_for_resource_deletion(resource=virtual_machine, **wait_kwargs)

    LOGGER.info(f"All resources of import {vm_import.name} were deleted")
