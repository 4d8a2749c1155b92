"""Records exchanged between the topology builder and its provisioner."""

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_ROUTE_CIDR = "0.0.0.0/0"


@dataclass(frozen=True)
class FlowLogDestinationOptions:
    """Format and partitioning of flow logs delivered to S3."""

    file_format: Optional[str] = None
    hive_compatible_partitions: Optional[bool] = None
    per_hour_partition: Optional[bool] = None


@dataclass(frozen=True)
class FlowLogConfig:
    """Traffic logging attached to the VPC."""

    enabled: bool
    traffic_type: str = "ALL"
    log_destination_type: Optional[str] = None
    log_destination: Optional[str] = None
    destination_options: Optional[FlowLogDestinationOptions] = None


@dataclass(frozen=True)
class TopologyRequest:
    """Everything needed to derive a VPC topology.

    The subnet CIDR at position ``i`` of either list is placed in
    ``availability_zones[i]``.
    """

    name: str
    cidr_block: str
    availability_zones: tuple = ()
    public_subnet_cidr_blocks: tuple = ()
    private_subnet_cidr_blocks: tuple = ()
    flow_log_config: Optional[FlowLogConfig] = None
    tags: dict = field(default_factory=dict)

    def __post_init__(self):
        # Accept lists from callers but store immutable sequences
        for attr in (
            "availability_zones",
            "public_subnet_cidr_blocks",
            "private_subnet_cidr_blocks",
        ):
            object.__setattr__(self, attr, tuple(getattr(self, attr) or ()))
        object.__setattr__(self, "tags", dict(self.tags or {}))


@dataclass(frozen=True)
class Resource:
    """A created resource as reported by a provisioner.

    ``id`` may be a deferred reference (e.g. a CloudFormation token) that
    only resolves at deploy time.
    """

    kind: str
    name: str
    id: str
    outputs: dict = field(default_factory=dict)


@dataclass(frozen=True)
class VpcArgs:
    cidr_block: str
    tags: dict


@dataclass(frozen=True)
class InternetGatewayArgs:
    vpc_id: str
    tags: dict


@dataclass(frozen=True)
class Route:
    """A single route; exactly one of the targets is set."""

    cidr_block: str
    gateway_id: Optional[str] = None
    nat_gateway_id: Optional[str] = None


@dataclass(frozen=True)
class RouteTableArgs:
    vpc_id: str
    routes: tuple
    tags: dict


@dataclass(frozen=True)
class RouteTableAssociationArgs:
    route_table_id: str
    subnet_id: str


@dataclass(frozen=True)
class SubnetArgs:
    vpc_id: str
    cidr_block: str
    availability_zone: str
    tags: dict


@dataclass(frozen=True)
class EipArgs:
    tags: dict


@dataclass(frozen=True)
class NatGatewayArgs:
    subnet_id: str
    allocation_id: str
    tags: dict


@dataclass(frozen=True)
class FlowLogArgs:
    vpc_id: str
    traffic_type: str
    log_destination_type: Optional[str]
    log_destination: Optional[str]
    destination_options: Optional[FlowLogDestinationOptions]
    tags: dict


@dataclass(frozen=True)
class PublicPartition:
    """Resources created for the public subnets."""

    internet_gateway: Resource
    route_table: Resource
    subnets: tuple


@dataclass(frozen=True)
class PrivatePartition:
    """Resources created for the private subnets.

    ``nat_gateway`` and ``nat_eip`` are only set when the topology also has
    public subnets to egress through.
    """

    route_table: Resource
    subnets: tuple
    nat_gateway: Optional[Resource] = None
    nat_eip: Optional[Resource] = None


@dataclass(frozen=True)
class TopologyResult:
    """All resources created for one topology request."""

    network_container: Resource
    public_subnets: tuple = ()
    private_subnets: tuple = ()
    internet_gateway: Optional[Resource] = None
    nat_gateway: Optional[Resource] = None
    nat_eip: Optional[Resource] = None
    public_route_table: Optional[Resource] = None
    private_route_table: Optional[Resource] = None
    flow_log: Optional[Resource] = None


@dataclass(frozen=True)
class WebTierConfig:
    """A load balanced instance placed in the VPC.

    ``listeners`` holds ``Listener`` records and ``access_logs`` an
    ``AccessLogsConfig`` of the classic load balancer construct.
    """

    name: str
    ami_id: str
    instance_type: str = "t3.micro"
    listeners: tuple = ()
    user_data: Optional[str] = None
    access_logs: Optional[object] = None
