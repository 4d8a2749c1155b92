"""Interface between the topology builder and whatever creates resources."""

import abc

from topology_builder.models import (
    EipArgs,
    FlowLogArgs,
    InternetGatewayArgs,
    NatGatewayArgs,
    Resource,
    RouteTableArgs,
    RouteTableAssociationArgs,
    SubnetArgs,
    VpcArgs,
)


class ResourceProvisioner(abc.ABC):
    """Create one resource per call and report its identifier.

    Every method takes a stable logical ``name`` and an argument record and
    returns a ``Resource``, or raises ``ProvisioningError``. Identifiers
    returned by one call may be passed into later calls before the
    underlying resource is live; implementations must resolve such
    references in creation order.
    """

    @abc.abstractmethod
    def create_vpc(self, name: str, args: VpcArgs) -> Resource:
        """Create the network container."""

    @abc.abstractmethod
    def create_internet_gateway(
        self, name: str, args: InternetGatewayArgs
    ) -> Resource:
        """Create an internet gateway attached to ``args.vpc_id``."""

    @abc.abstractmethod
    def create_route_table(self, name: str, args: RouteTableArgs) -> Resource:
        """Create a route table holding ``args.routes``."""

    @abc.abstractmethod
    def create_route_table_association(
        self, name: str, args: RouteTableAssociationArgs
    ) -> Resource:
        """Associate a subnet with a route table."""

    @abc.abstractmethod
    def create_subnet(self, name: str, args: SubnetArgs) -> Resource:
        """Create a subnet."""

    @abc.abstractmethod
    def create_eip(self, name: str, args: EipArgs) -> Resource:
        """Allocate a static address.

        The returned outputs must include ``allocation_id``.
        """

    @abc.abstractmethod
    def create_nat_gateway(self, name: str, args: NatGatewayArgs) -> Resource:
        """Create a NAT gateway."""

    @abc.abstractmethod
    def create_flow_log(self, name: str, args: FlowLogArgs) -> Resource:
        """Attach traffic logging to a VPC."""
