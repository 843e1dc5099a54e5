from typing import Any

from ocp_resources.resource import MissingRequiredArgumentError, NamespacedResource

from vm_import.constants import ApiGroups


class VirtualMachineImport(NamespacedResource):
    """OCP resource wrapper for the v2v VirtualMachineImport CR."""

    api_group: str = ApiGroups.V2V_KUBEVIRT_IO

    class Condition(NamespacedResource.Condition):
        PROCESSING: str = "Processing"

    def __init__(
        self,
        provider_credentials_secret: dict[str, str] | None = None,
        source: dict[str, Any] | None = None,
        target_vm_name: str | None = None,
        start_vm: bool | None = None,
        resource_mapping: dict[str, str] | None = None,
        **kwargs: Any,
    ):
        """
        Args:
            provider_credentials_secret: name and namespace of the provider credentials Secret
            source: source VM spec, e.g. {"ovirt": {"vm": {"id": "123"}}}
            target_vm_name: name of the VirtualMachine to create
            start_vm: whether to start the VirtualMachine after the import
            resource_mapping: name and namespace of a ResourceMapping to use
            kwargs: Keyword arguments to pass to the VirtualMachineImport constructor
        """
        super().__init__(
            **kwargs,
        )
        self.provider_credentials_secret = provider_credentials_secret
        self.source = source
        self.target_vm_name = target_vm_name
        self.start_vm = start_vm
        self.resource_mapping = resource_mapping

    def to_dict(self) -> None:
        super().to_dict()
        if not self.kind_dict and not self.yaml_file:
            if not self.provider_credentials_secret:
                raise MissingRequiredArgumentError(argument="provider_credentials_secret")
            if not self.source:
                raise MissingRequiredArgumentError(argument="source")

            self.res["spec"] = {}
            _spec = self.res["spec"]
            _spec["providerCredentialsSecret"] = self.provider_credentials_secret
            _spec["source"] = self.source

            if self.target_vm_name:
                _spec["targetVmName"] = self.target_vm_name
            if self.start_vm is not None:
                _spec["startVm"] = self.start_vm
            if self.resource_mapping:
                _spec["resourceMapping"] = self.resource_mapping
