from typing import NamedTuple, Optional

from kubernetes.dynamic import DynamicClient
from ocp_resources.config_map import ConfigMap
from ocp_resources.resource import NamespacedResource
from ocp_resources.secret import Secret
from simple_logger.logger import get_logger

from vm_import.labels import import_name_label_selector

LOGGER = get_logger(name=__name__)


class TemporaryResources(NamedTuple):
    config_map: Optional[ConfigMap]
    secret: Optional[Secret]


def list_temporary_resources(
    client: DynamicClient,
    resource_class: type[NamespacedResource],
    namespace: str,
    import_name: str,
) -> list[NamespacedResource]:
    """
    List the temporary resources of a kind created for an import.

    Args:
        client (DynamicClient): DynamicClient object
        resource_class (type[NamespacedResource]): resource kind to list, e.g. ConfigMap
        namespace (str): import namespace
        import_name (str): VirtualMachineImport name

    Returns:
        list[NamespacedResource]: matching resources in listing order

    """
    return list(
        resource_class.get(
            dyn_client=client,
            namespace=namespace,
            label_selector=import_name_label_selector(import_name=import_name),
        )
    )


def _get_temporary_resource(
    client: DynamicClient,
    resource_class: type[NamespacedResource],
    namespace: str,
    import_name: str,
) -> Optional[NamespacedResource]:
    resources = list_temporary_resources(
        client=client,
        resource_class=resource_class,
        namespace=namespace,
        import_name=import_name,
    )

    if not resources:
        return None

    if len(resources) > 1:
        LOGGER.warning(
            f"Found {len(resources)} temporary {resource_class.__name__} resources for import {import_name}, "
            f"using {resources[0].name}"
        )

    return resources[0]


def get_temporary_config_map(client: DynamicClient, namespace: str, import_name: str) -> Optional[ConfigMap]:
    """
    Args:
        client (DynamicClient): DynamicClient object
        namespace (str): import namespace
        import_name (str): VirtualMachineImport name

    Returns:
        ConfigMap | None: the first matching ConfigMap, None if there is none

    """
    return _get_temporary_resource(
        client=client, resource_class=ConfigMap, namespace=namespace, import_name=import_name
    )


def get_temporary_secret(client: DynamicClient, namespace: str, import_name: str) -> Optional[Secret]:
    """
    Args:
        client (DynamicClient): DynamicClient object
        namespace (str): import namespace
        import_name (str): VirtualMachineImport name

    Returns:
        Secret | None: the first matching Secret, None if there is none

    """
    return _get_temporary_resource(
        client=client, resource_class=Secret, namespace=namespace, import_name=import_name
    )


def get_import_temporary_resources(client: DynamicClient, namespace: str, import_name: str) -> TemporaryResources:
    return TemporaryResources(
        config_map=get_temporary_config_map(client=client, namespace=namespace, import_name=import_name),
        secret=get_temporary_secret(client=client, namespace=namespace, import_name=import_name),
    )
