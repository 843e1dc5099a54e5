import copy
from typing import Any, Optional

from kubernetes.dynamic import DynamicClient
from ocp_resources.template import Template
from simple_logger.logger import get_logger

from vm_import.constants import Labels, TemplateApi, TemplateParameters

LOGGER = get_logger(name=__name__)

SERVER_OWNED_METADATA_FIELDS: tuple[str, ...] = (
    "creationTimestamp",
    "generation",
    "managedFields",
    "resourceVersion",
    "uid",
)


class TemplateProvider:
    """Searches for and processes VM templates."""

    def __init__(self, client: DynamicClient):
        self.client = client

    def find(
        self,
        namespace: str,
        os: Optional[str] = None,
        workload: Optional[str] = None,
        flavor: Optional[str] = None,
    ) -> list[Template]:
        """
        Find templates in a namespace matching the given criteria.

        Args:
            namespace (str): namespace to search in
            os (str): operating system, e.g. rhel8
            workload (str): workload, e.g. server
            flavor (str): flavor, e.g. medium

        Returns:
            list[Template]: matching templates, empty if none match

        """
        label_selector = os_label_selector_builder(os=os, workload=workload, flavor=flavor)
        LOGGER.info(f"Searching templates in namespace {namespace} with label selector '{label_selector}'")

        return list(
            Template.get(
                dyn_client=self.client,
                namespace=namespace,
                label_selector=label_selector,
            )
        )

    def process(
        self,
        namespace: str,
        vm_name: Optional[str],
        template: Template | dict[str, Any],
    ) -> dict[str, Any]:
        """
        Process a template server side.

        The NAME parameter is set to `vm_name` (when given); every other parameter
        is set to a fixed substitute value. The body is moved to `namespace` and stripped of
        server owned metadata; the given template is never modified.

        Args:
            namespace (str): namespace to process the template in
            vm_name (str): name of the VM the template is processed for, None keeps NAME as is
            template (Template | dict[str, Any]): Template object or template body, from any namespace

        Returns:
            dict[str, Any]: processed template body

        """
        template_body = copy.deepcopy(template if isinstance(template, dict) else template.instance.to_dict())
        template_body.setdefault("apiVersion", TemplateApi.API_VERSION)
        template_body.setdefault("kind", "Template")

        metadata = template_body.setdefault("metadata", {})
        metadata["namespace"] = namespace
        for field in SERVER_OWNED_METADATA_FIELDS:
            metadata.pop(field, None)

        # every parameter other than NAME is replaced, caller supplied values included
        for parameter in template_body.get("parameters") or []:
            if parameter["name"] == TemplateParameters.NAME:
                if vm_name is not None:
                    parameter["value"] = vm_name
            else:
                parameter["value"] = TemplateParameters.OTHER_VALUE

        processed_templates = self.client.resources.get(
            api_version=TemplateApi.API_VERSION,
            name=TemplateApi.PROCESSED_TEMPLATES,
        )

        LOGGER.info(f"Processing template {template_body.get('metadata', {}).get('name')} in namespace {namespace}")
        result = self.client.create(resource=processed_templates, body=template_body, namespace=namespace)

        return result.to_dict()


def os_label_builder(
    os: Optional[str] = None,
    workload: Optional[str] = None,
    flavor: Optional[str] = None,
) -> dict[str, str]:
    """
    Build template labels from the given criteria, skipping the missing ones.

    Args:
        os (str): operating system
        workload (str): workload
        flavor (str): flavor

    Returns:
        dict[str, str]: labels dict, ordered os, workload, flavor

    """
    labels: dict[str, str] = {}

    if os is not None:
        labels[Labels.Template.OS.format(os)] = Labels.Template.ENABLED
    if workload is not None:
        labels[Labels.Template.WORKLOAD.format(workload)] = Labels.Template.ENABLED
    if flavor is not None:
        labels[Labels.Template.FLAVOR.format(flavor)] = Labels.Template.ENABLED

    return labels


def os_label_selector_builder(
    os: Optional[str] = None,
    workload: Optional[str] = None,
    flavor: Optional[str] = None,
) -> str:
    """Existence label selector for the given template criteria."""
    return ",".join(os_label_builder(os=os, workload=workload, flavor=flavor))
