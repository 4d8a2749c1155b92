"""Derive a VPC topology and create it through a resource provisioner.

The build runs strictly in order: the VPC first, then the public
partition, then the private partition (which may egress through a NAT
gateway in the first public subnet), then the optional flow log. Each step
receives the results of earlier steps as arguments. The first failure stops
the build; resources created before it are left for the provisioning
backend to clean up.
"""

import logging
from enum import Enum

from topology_builder.errors import (
    ProvisioningError,
    ResourceCreationError,
    ValidationError,
)
from topology_builder.models import (
    DEFAULT_ROUTE_CIDR,
    EipArgs,
    FlowLogArgs,
    InternetGatewayArgs,
    NatGatewayArgs,
    PrivatePartition,
    PublicPartition,
    Route,
    RouteTableArgs,
    RouteTableAssociationArgs,
    SubnetArgs,
    TopologyResult,
    VpcArgs,
)
from topology_builder.utils.tags import with_name_tag

logger = logging.getLogger(__name__)


class BuildState(Enum):
    """Stages a topology build passes through."""

    VALIDATING = "Validating"
    CONTAINER_CREATED = "ContainerCreated"
    PUBLIC_BUILT = "PublicBuilt"
    PRIVATE_BUILT = "PrivateBuilt"
    LOG_BOUND = "LogBound"
    DONE = "Done"
    FAILED = "Failed"


def validate_request(request):
    """Ensure every requested subnet has an availability zone.

    Parameters
    ----------
    request : TopologyRequest
        The topology to validate.

    Raises
    ------
    ValidationError
        If either subnet list is longer than the availability zone list.
    """
    az_count = len(request.availability_zones)
    subnet_count = max(
        len(request.public_subnet_cidr_blocks),
        len(request.private_subnet_cidr_blocks),
    )
    if subnet_count > az_count:
        raise ValidationError(
            "not enough availability zones provided: "
            f"{subnet_count} subnets per partition requested, "
            f"{az_count} availability zones given"
        )


def create_network_container(provisioner, request):
    """Create the VPC every other resource lives in."""
    try:
        return provisioner.create_vpc(
            request.name,
            VpcArgs(
                cidr_block=request.cidr_block,
                tags=with_name_tag(request.tags, request.name),
            ),
        )
    except ProvisioningError as err:
        raise ResourceCreationError(
            "while creating network container", err
        ) from err


def _create_subnets(provisioner, request, vpc, route_table, cidr_blocks, tier):
    subnets = []
    for i, cidr in enumerate(cidr_blocks):
        name = f"{request.name}-{tier}-subnet-{i}"
        subnet = provisioner.create_subnet(
            name,
            SubnetArgs(
                vpc_id=vpc.id,
                cidr_block=cidr,
                availability_zone=request.availability_zones[i],
                tags=with_name_tag(request.tags, name),
            ),
        )
        # Associate each subnet on its own so a failure names the subnet
        provisioner.create_route_table_association(
            name,
            RouteTableAssociationArgs(
                route_table_id=route_table.id, subnet_id=subnet.id
            ),
        )
        logger.info(
            "Created %s subnet %s (%s) in %s",
            tier,
            name,
            cidr,
            request.availability_zones[i],
        )
        subnets.append(subnet)
    return tuple(subnets)


def create_public_partition(provisioner, request, vpc):
    """Create the internet gateway, public route table and public subnets.

    Parameters
    ----------
    provisioner : ResourceProvisioner
        Backend that creates the resources.
    request : TopologyRequest
        Must have at least one public subnet CIDR.
    vpc : Resource
        The network container.

    Returns
    -------
    PublicPartition
        The gateway, route table and subnets in input order.
    """
    try:
        igw_name = f"{request.name}-igw"
        internet_gateway = provisioner.create_internet_gateway(
            igw_name,
            InternetGatewayArgs(
                vpc_id=vpc.id, tags=with_name_tag(request.tags, igw_name)
            ),
        )

        rt_name = f"{request.name}-public"
        route_table = provisioner.create_route_table(
            rt_name,
            RouteTableArgs(
                vpc_id=vpc.id,
                routes=(
                    Route(
                        cidr_block=DEFAULT_ROUTE_CIDR, gateway_id=internet_gateway.id
                    ),
                ),
                tags=with_name_tag(request.tags, rt_name),
            ),
        )

        subnets = _create_subnets(
            provisioner,
            request,
            vpc,
            route_table,
            request.public_subnet_cidr_blocks,
            "public",
        )
    except ProvisioningError as err:
        raise ResourceCreationError("while creating public subnets", err) from err

    return PublicPartition(
        internet_gateway=internet_gateway, route_table=route_table, subnets=subnets
    )


def _create_nat_gateway(provisioner, request, public_subnet):
    try:
        eip_name = f"{request.name}-nat-eip"
        eip = provisioner.create_eip(
            eip_name, EipArgs(tags=with_name_tag(request.tags, eip_name))
        )

        nat_name = f"{request.name}-nat-gateway"
        nat_gateway = provisioner.create_nat_gateway(
            nat_name,
            NatGatewayArgs(
                subnet_id=public_subnet.id,
                allocation_id=eip.outputs["allocation_id"],
                tags=with_name_tag(request.tags, nat_name),
            ),
        )
    except ProvisioningError as err:
        raise ResourceCreationError("while creating NAT gateway", err) from err

    logger.info("Created NAT gateway %s in %s", nat_name, public_subnet.name)
    return eip, nat_gateway


def create_private_partition(provisioner, request, vpc, public_subnets=()):
    """Create the private route table and private subnets.

    When ``public_subnets`` is non-empty a NAT gateway is placed in its
    first subnet and the private route table gets a default route through
    it. Without public subnets the private subnets have no route out.

    Parameters
    ----------
    provisioner : ResourceProvisioner
        Backend that creates the resources.
    request : TopologyRequest
        Must have at least one private subnet CIDR.
    vpc : Resource
        The network container.
    public_subnets : tuple of Resource, optional
        Subnets of the public partition, if one was built.

    Returns
    -------
    PrivatePartition
        The route table, subnets in input order and NAT resources if any.
    """
    routes = ()
    eip = nat_gateway = None
    if public_subnets:
        eip, nat_gateway = _create_nat_gateway(provisioner, request, public_subnets[0])
        routes = (
            Route(cidr_block=DEFAULT_ROUTE_CIDR, nat_gateway_id=nat_gateway.id),
        )
    else:
        logger.info(
            "No public subnets in %s, private subnets are isolated", request.name
        )

    try:
        rt_name = f"{request.name}-private"
        route_table = provisioner.create_route_table(
            rt_name,
            RouteTableArgs(
                vpc_id=vpc.id,
                routes=routes,
                tags=with_name_tag(request.tags, rt_name),
            ),
        )

        subnets = _create_subnets(
            provisioner,
            request,
            vpc,
            route_table,
            request.private_subnet_cidr_blocks,
            "private",
        )
    except ProvisioningError as err:
        raise ResourceCreationError("while creating private subnets", err) from err

    return PrivatePartition(
        route_table=route_table, subnets=subnets, nat_gateway=nat_gateway, nat_eip=eip
    )


def create_flow_log(provisioner, request, vpc):
    """Attach the configured flow log to the VPC."""
    config = request.flow_log_config
    name = f"{request.name}-flow-log"
    try:
        return provisioner.create_flow_log(
            name,
            FlowLogArgs(
                vpc_id=vpc.id,
                traffic_type=config.traffic_type,
                log_destination_type=config.log_destination_type,
                log_destination=config.log_destination,
                destination_options=config.destination_options,
                tags=with_name_tag(request.tags, name),
            ),
        )
    except ProvisioningError as err:
        raise ResourceCreationError("while creating flow log", err) from err


def build_topology(provisioner, request):
    """Validate ``request`` and create its whole topology.

    Parameters
    ----------
    provisioner : ResourceProvisioner
        Backend that creates the resources.
    request : TopologyRequest
        The topology to build.

    Returns
    -------
    TopologyResult
        Every resource that was created.

    Raises
    ------
    ValidationError
        If the request is invalid. Nothing is created.
    ResourceCreationError
        If any resource fails to create. Later steps are not attempted.
    """
    state = BuildState.VALIDATING

    def advance(new_state):
        nonlocal state
        logger.info("Topology %s: %s -> %s", request.name, state.value, new_state.value)
        state = new_state

    try:
        validate_request(request)

        vpc = create_network_container(provisioner, request)
        advance(BuildState.CONTAINER_CREATED)

        public = None
        if request.public_subnet_cidr_blocks:
            public = create_public_partition(provisioner, request, vpc)
            advance(BuildState.PUBLIC_BUILT)

        private = None
        if request.private_subnet_cidr_blocks:
            private = create_private_partition(
                provisioner,
                request,
                vpc,
                public.subnets if public is not None else (),
            )
            advance(BuildState.PRIVATE_BUILT)

        flow_log = None
        if request.flow_log_config is not None and request.flow_log_config.enabled:
            flow_log = create_flow_log(provisioner, request, vpc)
            advance(BuildState.LOG_BOUND)
    except Exception as err:
        logger.error(
            "Topology %s failed in state %s: %s", request.name, state.value, err
        )
        advance(BuildState.FAILED)
        raise

    advance(BuildState.DONE)

    return TopologyResult(
        network_container=vpc,
        public_subnets=public.subnets if public is not None else (),
        private_subnets=private.subnets if private is not None else (),
        internet_gateway=public.internet_gateway if public is not None else None,
        nat_gateway=private.nat_gateway if private is not None else None,
        nat_eip=private.nat_eip if private is not None else None,
        public_route_table=public.route_table if public is not None else None,
        private_route_table=private.route_table if private is not None else None,
        flow_log=flow_log,
    )
