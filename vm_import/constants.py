class ApiGroups:
    TEMPLATE_OPENSHIFT_IO: str = "template.openshift.io"
    TEMPLATE_KUBEVIRT_IO: str = "template.kubevirt.io"
    V2V_KUBEVIRT_IO: str = "v2v.kubevirt.io"
    VMIMPORT_V2V_KUBEVIRT_IO: str = f"vmimport.{V2V_KUBEVIRT_IO}"


class TemplateApi:
    API_VERSION: str = f"{ApiGroups.TEMPLATE_OPENSHIFT_IO}/v1"
    PROCESSED_TEMPLATES: str = "processedtemplates"


class Labels:
    class Template:
        # Formatted with the dimension value, e.g. OS.format("rhel8")
        OS: str = f"os.{ApiGroups.TEMPLATE_KUBEVIRT_IO}/{{}}"
        WORKLOAD: str = f"workload.{ApiGroups.TEMPLATE_KUBEVIRT_IO}/{{}}"
        FLAVOR: str = f"flavor.{ApiGroups.TEMPLATE_KUBEVIRT_IO}/{{}}"
        ENABLED: str = "true"

    class VmImport:
        VMI_NAME: str = f"{ApiGroups.VMIMPORT_V2V_KUBEVIRT_IO}/vmi-name"


class Annotations:
    class Template:
        NAME_OS: str = f"name.os.{ApiGroups.TEMPLATE_KUBEVIRT_IO}/{{}}"


class TemplateParameters:
    NAME: str = "NAME"
    OTHER_VALUE: str = "other"


class LabelValue:
    MAX_LENGTH: int = 63
    HASH_SUFFIX_LENGTH: int = 10


class PropagationPolicy:
    FOREGROUND: str = "Foreground"
    BACKGROUND: str = "Background"
    ORPHAN: str = "Orphan"
    ALL: list[str] = [FOREGROUND, BACKGROUND, ORPHAN]


class Timeout:
    TIMEOUT_1SEC: int = 1
    TIMEOUT_1MIN: int = 60
    TIMEOUT_2MIN: int = 2 * TIMEOUT_1MIN
    TIMEOUT_5MIN: int = 5 * TIMEOUT_1MIN


class OvirtSecret:
    KEY: str = "ovirt"
