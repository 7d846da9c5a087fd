"""
Typed wrappers around FusionCompute request and response bodies.

Each class keeps the raw JSON mapping in ``data`` and exposes the fields the
client works with as properties. ``required_fields`` lists the keys a
response must carry to count as well-formed; ``from_payload`` enforces it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .errors import DecodeError


class BaseResource:
    required_fields: tuple = ()

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = data if data is not None else {}

    @classmethod
    def from_payload(cls, payload):
        """Validate a decoded JSON body and wrap it."""
        if not isinstance(payload, dict):
            raise DecodeError(
                f"{cls.__name__}: expected a JSON object, got {type(payload).__name__}"
            )
        missing = [field for field in cls.required_fields if field not in payload]
        if missing:
            raise DecodeError(f"{cls.__name__}: missing field(s) {', '.join(missing)}")
        return cls(payload)

    @classmethod
    def coerce(cls, value):
        """Accept either an instance or a plain dict body."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(value)
        raise TypeError(f"Expected {cls.__name__} or dict, got {type(value).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        return self.data

    def __eq__(self, other):
        return type(self) is type(other) and self.data == other.data

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.data!r})>"


class Disk(BaseResource):
    @property
    def sequence_num(self):
        return self.data.get("sequenceNum")

    @property
    def quantity_gb(self):
        return self.data.get("quantityGB")

    @property
    def datastore_urn(self):
        return self.data.get("datastoreUrn")

    @property
    def is_thin(self):
        return self.data.get("isThin", False)


class Nic(BaseResource):
    @property
    def name(self):
        return self.data.get("name")

    @property
    def mac(self):
        return self.data.get("mac")

    @property
    def ip(self):
        return self.data.get("ip")

    @property
    def port_group_urn(self):
        return self.data.get("portGroupUrn")


class VmConfig(BaseResource):
    @property
    def cpu_quantity(self):
        return (self.data.get("cpu") or {}).get("quantity")

    @property
    def memory_mb(self):
        return (self.data.get("memory") or {}).get("quantityMB")

    @property
    def disks(self) -> List[Disk]:
        return [Disk(item) for item in self.data.get("disks") or []]

    @property
    def nics(self) -> List[Nic]:
        return [Nic(item) for item in self.data.get("nics") or []]


class Vm(BaseResource):
    """A virtual machine or template as returned by ``GET <vm uri>``."""

    required_fields = ("uri", "urn", "name")

    @classmethod
    def from_payload(cls, payload):
        vm = super().from_payload(payload)
        vm_config = payload.get("vmConfig")
        if vm_config is None:
            return vm
        if not isinstance(vm_config, dict):
            raise DecodeError(f"Vm: 'vmConfig' must be an object, got {type(vm_config).__name__}")
        disks = vm_config.get("disks")
        if disks is None:
            return vm
        if not isinstance(disks, list):
            raise DecodeError(f"Vm: 'vmConfig.disks' must be a list, got {type(disks).__name__}")
        for index, disk in enumerate(disks):
            if not isinstance(disk, dict):
                raise DecodeError(f"Vm: disk {index} must be an object, got {type(disk).__name__}")
            quantity = disk.get("quantityGB")
            if quantity is not None and (isinstance(quantity, bool) or not isinstance(quantity, int)):
                raise DecodeError(f"Vm: disk {index} 'quantityGB' must be an integer, got {quantity!r}")
        return vm

    @property
    def uri(self):
        return self.data.get("uri")

    @property
    def urn(self):
        return self.data.get("urn")

    @property
    def uuid(self):
        return self.data.get("uuid")

    @property
    def name(self):
        return self.data.get("name")

    @property
    def description(self):
        return self.data.get("description", "")

    @property
    def status(self):
        return self.data.get("status")

    @property
    def is_template(self):
        return bool(self.data.get("isTemplate", False))

    @property
    def location(self):
        return self.data.get("location")

    @property
    def host_urn(self):
        return self.data.get("hostUrn")

    @property
    def host_name(self):
        return self.data.get("hostName", "")

    @property
    def vm_config(self) -> VmConfig:
        return VmConfig(self.data.get("vmConfig") or {})


class ListVmResponse(BaseResource):
    required_fields = ("vms",)

    @classmethod
    def from_payload(cls, payload):
        response = super().from_payload(payload)
        items = response.data["vms"]
        if not isinstance(items, list):
            raise DecodeError(f"ListVmResponse: 'vms' must be a list, got {type(items).__name__}")
        # Validate every entry up front so a bad item fails the whole call.
        response._vms = [Vm.from_payload(item) for item in items]
        return response

    @property
    def total(self):
        return self.data.get("total", len(self.vms))

    @property
    def vms(self) -> List[Vm]:
        cached = getattr(self, "_vms", None)
        if cached is None:
            cached = [Vm(item) for item in self.data.get("vms") or []]
        return cached


class TaskResponse(BaseResource):
    """Responses of asynchronous actions: the platform hands back a task handle."""

    required_fields = ("taskUrn", "taskUri")

    @property
    def task_urn(self):
        return self.data.get("taskUrn")

    @property
    def task_uri(self):
        return self.data.get("taskUri")


class CloneVmResponse(TaskResponse):
    @property
    def uri(self):
        return self.data.get("uri")

    @property
    def urn(self):
        return self.data.get("urn")


class StartVmResponse(TaskResponse):
    pass


class DeleteVmResponse(TaskResponse):
    pass


class RebootVmResponse(TaskResponse):
    pass


class MigrateVmResponse(TaskResponse):
    pass


class ImportTemplateResponse(TaskResponse):
    @property
    def uri(self):
        return self.data.get("uri")

    @property
    def urn(self):
        return self.data.get("urn")


class CloneVmRequest(BaseResource):
    """
    Body of ``POST <template uri>/action/clone``.

    Shape (only the parts this client touches are listed):
    {
      "name": "...",
      "vmConfig": {"disks": [{"quantityGB": 100, ...}], ...},
      "vmCustomization": {"nicSpecification": [{"ip": "...", "netmask": "24", ...}]}
    }

    ``disks`` and ``nic_specifications`` return the live dicts inside ``data``
    so edits land in the body that gets sent.
    """

    @property
    def name(self):
        return self.data.get("name")

    @property
    def disks(self) -> List[Dict[str, Any]]:
        return (self.data.get("vmConfig") or {}).get("disks") or []

    @property
    def nic_specifications(self) -> List[Dict[str, Any]]:
        return (self.data.get("vmCustomization") or {}).get("nicSpecification") or []


class ImportTemplateRequest(BaseResource):
    """Body of ``POST <uri>/action/import`` (image upload as template)."""

    @property
    def url(self):
        return self.data.get("url")

    @property
    def protocol(self):
        return self.data.get("protocol")


class SiteListResponse(BaseResource):
    """Body of ``GET /service/sites``."""

    required_fields = ("sites",)

    @classmethod
    def from_payload(cls, payload):
        response = super().from_payload(payload)
        sites = response.data["sites"]
        if not isinstance(sites, list) or not all(isinstance(item, dict) for item in sites):
            raise DecodeError("SiteListResponse: 'sites' must be a list of objects")
        return response

    @property
    def sites(self) -> List[Dict[str, Any]]:
        return self.data["sites"]
