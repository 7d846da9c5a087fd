"""VM operations against a FusionCompute site."""

from __future__ import annotations

import logging

from .decoder import decode_response
from .errors import InputError
from .models import (
    CloneVmRequest,
    CloneVmResponse,
    DeleteVmResponse,
    ImportTemplateRequest,
    ImportTemplateResponse,
    ListVmResponse,
    MigrateVmResponse,
    RebootVmResponse,
    StartVmResponse,
    Vm,
)
from .netmask import normalize_netmask

logger = logging.getLogger(__name__)

SITE_MASK = "<site_uri>"
VM_COLLECTION = f"{SITE_MASK}/vms"


def _action_path(uri: str, action: str) -> str:
    return f"{uri.rstrip('/')}/action/{action}"


class VmManager:
    """
    VM lifecycle operations for one site.

    :param client: object exposing ``request(method, path, params=None, body=None)``
        and returning a ``requests.Response``-like object
        (normally :class:`fusioncompute.client.FusionComputeClient`).
    :param site_uri: URI of the site, e.g. ``/service/sites/3F0A07AF``.
    """

    def __init__(self, client, site_uri: str):
        self.client = client
        self.site_uri = site_uri

    def _send(self, method, path, response_cls, params=None, body=None):
        logger.debug(f"FusionCompute {method} {path}")
        response = self.client.request(method, path, params=params, body=body)
        return decode_response(response, response_cls, method, path)

    def list_vms(self, is_template: bool = False):
        """Return the site's VMs, or only its templates when ``is_template`` is set."""
        path = VM_COLLECTION.replace(SITE_MASK, self.site_uri)
        params = {"isTemplate": "true"} if is_template else None
        result = self._send("GET", path, ListVmResponse, params=params)
        logger.debug(f"Listed {len(result.vms)} VMs under {self.site_uri} (templates only: {is_template})")
        return result.vms

    def get_vm(self, vm_uri: str) -> Vm:
        return self._send("GET", vm_uri, Vm)

    def clone_vm(self, template_uri: str, request) -> CloneVmResponse:
        """
        Clone ``template_uri`` into a new VM.

        Prefix-length netmasks in the NIC customization are rewritten to
        dotted-decimal in place, and the first disk is never sent smaller than
        the template's first disk. A bad netmask fails the call before any
        request is made.
        """
        request = CloneVmRequest.coerce(request)

        for nic in request.nic_specifications:
            netmask = nic.get("netmask")
            if isinstance(netmask, str) and "." in netmask:
                continue
            nic["netmask"] = normalize_netmask(netmask)
            logger.debug(f"Normalized netmask {netmask!r} to {nic['netmask']} for NIC {nic.get('ip')}")

        requested_disks = request.disks
        if requested_disks:
            requested = requested_disks[0].get("quantityGB")
            if requested is not None and (isinstance(requested, bool) or not isinstance(requested, int)):
                raise InputError(f"First disk quantityGB must be an integer, got {requested!r}")

        template = self.get_vm(template_uri)
        template_disks = template.vm_config.disks
        if template_disks and requested_disks:
            minimum = template_disks[0].quantity_gb or 0
            requested = requested_disks[0].get("quantityGB") or 0
            if requested < minimum:
                logger.warning(
                    f"Requested first disk of {requested} GB is smaller than template "
                    f"{template.name} ({minimum} GB). Using {minimum} GB."
                )
                requested_disks[0]["quantityGB"] = minimum

        return self._send(
            "POST",
            _action_path(template_uri, "clone"),
            CloneVmResponse,
            body=request.to_dict(),
        )

    def start_vm(self, vm_uri: str) -> StartVmResponse:
        return self._send("POST", _action_path(vm_uri, "start"), StartVmResponse)

    def delete_vm(self, vm_uri: str) -> DeleteVmResponse:
        return self._send("DELETE", vm_uri, DeleteVmResponse)

    def reboot_vm(self, vm_uri: str, safe: bool) -> RebootVmResponse:
        body = {"mode": "safe" if safe else "force"}
        return self._send("POST", _action_path(vm_uri, "reboot"), RebootVmResponse, body=body)

    def migrate_vm(self, vm_uri: str, host_urn: str, is_binding_host: bool) -> MigrateVmResponse:
        # The platform expects the flag as a string literal.
        body = {
            "location": host_urn,
            "isBindingHost": "true" if is_binding_host else "false",
        }
        return self._send("POST", _action_path(vm_uri, "migrate"), MigrateVmResponse, body=body)

    def get_host_name_of(self, vm_uri: str) -> str:
        return self.get_vm(vm_uri).host_name

    def upload_image(self, vm_uri: str, request) -> ImportTemplateResponse:
        """Import an image as a template (``POST <uri>/action/import``)."""
        request = ImportTemplateRequest.coerce(request)
        return self._send(
            "POST",
            _action_path(vm_uri, "import"),
            ImportTemplateResponse,
            body=request.to_dict(),
        )
