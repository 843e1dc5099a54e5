"""
Import label scheme.

Every temporary resource created for a VirtualMachineImport is tagged with the
import name as a label value, so the value must satisfy the Kubernetes
label-value rules: at most 63 characters, alphanumeric at both ends, and only
``-``, ``_`` and ``.`` in between.
"""

import hashlib
import re

from vm_import.constants import LabelValue, Labels

LABEL_VALUE_PATTERN = re.compile(r"^(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])?$")
INVALID_LABEL_CHARS_PATTERN = re.compile(r"[^-A-Za-z0-9_.]")
NON_ALPHANUMERIC_EDGES_PATTERN = re.compile(r"^[^A-Za-z0-9]+|[^A-Za-z0-9]+$")


def is_valid_label_value(value: str) -> bool:
    return len(value) <= LabelValue.MAX_LENGTH and bool(LABEL_VALUE_PATTERN.match(value))


def ensure_label_value_length(value: str) -> str:
    """
    Derive a label value from an arbitrary name.

    Valid values are returned as is. Anything else is normalized and shortened,
    then suffixed with a digest of the original value so that two different
    names never end up with the same label value because of truncation.

    Kept values and derived values share one value space: a valid name spelled
    exactly like another name's derived `<prefix>-<digest>` value maps to the same
    label value. Import names are not expected to take that form.

    Args:
        value (str): name to derive the label value from, e.g. the import name

    Returns:
        str: a valid label value, identical for identical input

    """
    if is_valid_label_value(value=value):
        return value

    digest = hashlib.sha256(value.encode()).hexdigest()[: LabelValue.HASH_SUFFIX_LENGTH]
    prefix_length = LabelValue.MAX_LENGTH - LabelValue.HASH_SUFFIX_LENGTH - 1

    prefix = INVALID_LABEL_CHARS_PATTERN.sub("-", value)[:prefix_length]
    prefix = NON_ALPHANUMERIC_EDGES_PATTERN.sub("", prefix)

    if not prefix:
        return digest

    return f"{prefix}-{digest}"


def import_name_label_selector(import_name: str) -> str:
    """
    Label selector matching the temporary resources of an import.

    Args:
        import_name (str): VirtualMachineImport name

    Returns:
        str: label selector string

    """
    return f"{Labels.VmImport.VMI_NAME}={ensure_label_value_length(value=import_name)}"
