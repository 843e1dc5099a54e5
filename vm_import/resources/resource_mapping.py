from typing import Any

from ocp_resources.resource import MissingRequiredArgumentError, NamespacedResource

from vm_import.constants import ApiGroups


class ResourceMapping(NamespacedResource):
    """OCP resource wrapper for the v2v ResourceMapping CR."""

    api_group: str = ApiGroups.V2V_KUBEVIRT_IO

    def __init__(
        self,
        ovirt_mappings: dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        """
        Args:
            ovirt_mappings: oVirt network, storage and disk mappings
            kwargs: Keyword arguments to pass to the ResourceMapping constructor
        """
        super().__init__(
            **kwargs,
        )
        self.ovirt_mappings = ovirt_mappings

    def to_dict(self) -> None:
        super().to_dict()
        if not self.kind_dict and not self.yaml_file:
            if self.ovirt_mappings is None:
                raise MissingRequiredArgumentError(argument="ovirt_mappings")
            self.res["spec"] = {"ovirt": self.ovirt_mappings}
