"""Setup items for the unit tests."""

import pytest

from topology_builder.errors import ProvisioningError
from topology_builder.models import Resource
from topology_builder.provisioner import ResourceProvisioner


class RecordingProvisioner(ResourceProvisioner):
    """Provisioner that records every call and hands out fake ids.

    ``fail_on`` is a ``(kind, name)`` pair; the matching call raises
    ``ProvisioningError`` instead of creating anything.
    """

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def _create(self, kind, name, args, **outputs):
        if self.fail_on == (kind, name):
            raise ProvisioningError(kind, name, "simulated failure")
        self.calls.append((kind, name, args))
        return Resource(kind=kind, name=name, id=f"{kind}:{name}", outputs=outputs)

    def create_vpc(self, name, args):
        return self._create("vpc", name, args)

    def create_internet_gateway(self, name, args):
        return self._create("internet_gateway", name, args)

    def create_route_table(self, name, args):
        return self._create("route_table", name, args)

    def create_route_table_association(self, name, args):
        return self._create("route_table_association", name, args)

    def create_subnet(self, name, args):
        return self._create("subnet", name, args)

    def create_eip(self, name, args):
        return self._create("eip", name, args, allocation_id=f"eipalloc:{name}")

    def create_nat_gateway(self, name, args):
        return self._create("nat_gateway", name, args)

    def create_flow_log(self, name, args):
        return self._create("flow_log", name, args)

    def calls_of(self, kind):
        """Return the (name, args) of every call for ``kind``, in order."""
        return [
            (name, args) for call_kind, name, args in self.calls if call_kind == kind
        ]

    def kinds(self):
        """Return the kinds created, in order."""
        return [kind for kind, _, _ in self.calls]


@pytest.fixture()
def provisioner():
    """Return a recording provisioner."""
    return RecordingProvisioner()


@pytest.fixture()
def failing_provisioner():
    """Return a factory for provisioners that fail on one resource."""

    def _make(kind, name):
        return RecordingProvisioner(fail_on=(kind, name))

    return _make
