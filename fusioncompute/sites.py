import logging

from .vm import VmManager

logger = logging.getLogger(__name__)


class Site:

    def __init__(self, client, data):
        """
        :param client: FusionComputeClient instance
        :param data: Dictionary with site data (uri, urn, name, status, ...)
        """

        self.client = client
        self.uri = data.get("uri")
        self.urn = data.get("urn")
        self.name: str = data.get("name") or self.urn or str(self.uri)
        self.status = data.get("status")
        self.ip = data.get("ip")

        # VM operations are always scoped to a site URI
        self.vm = VmManager(self.client, self.uri)

    def __str__(self):
        return f"{self.__class__.__name__}: {self.name}"

    def __repr__(self):
        return f"<Site(name={self.name}, uri={self.uri})>"

    def __eq__(self, other):
        return isinstance(other, Site) and self.uri == other.uri
