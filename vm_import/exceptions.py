class InvalidPropagationPolicyError(Exception):
    def __init__(self, propagation_policy: str):
        self.propagation_policy = propagation_policy

    def __str__(self) -> str:
        return f"Propagation policy {self.propagation_policy} is not supported"


class DataVolumeNotFoundError(Exception):
    def __init__(self, vm_name: str):
        self.vm_name = vm_name

    def __str__(self) -> str:
        return f"VirtualMachine {self.vm_name} has no DataVolume backed volume"


class MissingOwnerUidError(Exception):
    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        return f"{self.kind} {self.name} has no uid; it must exist before it can own other resources"
