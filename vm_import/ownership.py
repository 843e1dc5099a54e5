"""
Ownership wiring between an import and the resources it produces.

Temporary resources are tagged with the import label so they can be found by
label. Downstream resources (VirtualMachine, DataVolume) are not labelled, so
they are linked with native owner references instead, which lets a foreground
deletion of the import cascade down to them.
"""

from typing import Any

from ocp_resources.resource import ResourceEditor, NamespacedResource
from simple_logger.logger import get_logger

from vm_import.constants import Labels
from vm_import.exceptions import MissingOwnerUidError
from vm_import.labels import ensure_label_value_length

LOGGER = get_logger(name=__name__)


def import_labels(import_name: str) -> dict[str, str]:
    """Labels to set on every temporary resource of the import."""
    return {Labels.VmImport.VMI_NAME: ensure_label_value_length(value=import_name)}


def owner_reference(
    owner: NamespacedResource,
    block_owner_deletion: bool = True,
    controller: bool = False,
) -> dict[str, Any]:
    """
    Build an owner reference pointing at an existing resource.

    Args:
        owner (NamespacedResource): owning resource
        block_owner_deletion (bool): keep the owner until the dependent is deleted (foreground deletion)
        controller (bool): mark the owner as the managing controller

    Returns:
        dict[str, Any]: owner reference

    Raises:
        MissingOwnerUidError: if the owner does not exist in the cluster

    """
    instance = owner.instance
    uid = instance.metadata.uid
    if not uid:
        raise MissingOwnerUidError(kind=instance.kind, name=owner.name)

    return {
        "apiVersion": instance.apiVersion,
        "kind": instance.kind,
        "name": owner.name,
        "uid": uid,
        "blockOwnerDeletion": block_owner_deletion,
        "controller": controller,
    }


def set_owner_reference(resource: NamespacedResource, owner: NamespacedResource) -> bool:
    """
    Add `owner` to the owner references of `resource`.

    Args:
        resource (NamespacedResource): dependent resource
        owner (NamespacedResource): owning resource

    Returns:
        bool: True if the resource was patched, False if the owner was already set

    """
    reference = owner_reference(owner=owner)
    current_references = resource.instance.to_dict()["metadata"].get("ownerReferences") or []

    if any(ref.get("uid") == reference["uid"] for ref in current_references):
        return False

    LOGGER.info(f"Setting {reference['kind']} {owner.name} as owner of {resource.name}")
    ResourceEditor(
        patches={resource: {"metadata": {"ownerReferences": [*current_references, reference]}}}
    ).update()

    return True


def chain_import_ownership(
    vm_import: NamespacedResource,
    virtual_machine: NamespacedResource,
    data_volume: NamespacedResource,
) -> None:
    """
    Link import -> VirtualMachine -> DataVolume with owner references.

    Args:
        vm_import (NamespacedResource): VirtualMachineImport object
        virtual_machine (NamespacedResource): VirtualMachine created by the import
        data_volume (NamespacedResource): DataVolume backing the VirtualMachine

    """
    set_owner_reference(resource=virtual_machine, owner=vm_import)
    set_owner_reference(resource=data_volume, owner=virtual_machine)
