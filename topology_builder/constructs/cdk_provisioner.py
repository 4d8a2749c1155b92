"""Provision topology resources as CloudFormation resources in a CDK scope."""

import logging
from contextlib import contextmanager

from aws_cdk import aws_ec2 as ec2
from constructs import Construct
from jsii.errors import JSIIError

from topology_builder.errors import ProvisioningError
from topology_builder.models import Resource
from topology_builder.provisioner import ResourceProvisioner
from topology_builder.utils.tags import to_cfn_tags

logger = logging.getLogger(__name__)


class CdkResourceProvisioner(ResourceProvisioner):
    """Resource provisioner that declares L1 ``aws_ec2`` constructs in a scope.

    Identifiers returned are CloudFormation tokens (``Ref``/``Fn::GetAtt``),
    so CloudFormation orders creation by the references between resources.
    Routes through an internet gateway additionally depend on the gateway's
    VPC attachment, which has no reference of its own.
    """

    def __init__(self, scope: Construct) -> None:
        """Create a provisioner.

        Parameters
        ----------
        scope : Construct
            Construct the resources are declared in.

        """
        self.scope = scope
        # Internet gateway id token -> its VPC attachment
        self._gateway_attachments = {}

    @contextmanager
    def _provisioning(self, kind, name):
        try:
            yield
        except (JSIIError, RuntimeError, TypeError, ValueError) as err:
            raise ProvisioningError(kind, name, str(err)) from err
        logger.debug("Declared %s %s", kind, name)

    def create_vpc(self, name, args):
        with self._provisioning("vpc", name):
            vpc = ec2.CfnVPC(
                self.scope,
                f"Vpc-{name}",
                cidr_block=args.cidr_block,
                tags=to_cfn_tags(args.tags),
            )
        return Resource(
            kind="vpc",
            name=name,
            id=vpc.ref,
            outputs={"cidr_block": vpc.attr_cidr_block},
        )

    def create_internet_gateway(self, name, args):
        with self._provisioning("internet gateway", name):
            igw = ec2.CfnInternetGateway(
                self.scope, f"InternetGateway-{name}", tags=to_cfn_tags(args.tags)
            )
            attachment = ec2.CfnVPCGatewayAttachment(
                self.scope,
                f"InternetGatewayAttachment-{name}",
                vpc_id=args.vpc_id,
                internet_gateway_id=igw.ref,
            )
        self._gateway_attachments[igw.ref] = attachment
        return Resource(kind="internet_gateway", name=name, id=igw.ref)

    def create_route_table(self, name, args):
        with self._provisioning("route table", name):
            route_table = ec2.CfnRouteTable(
                self.scope,
                f"RouteTable-{name}",
                vpc_id=args.vpc_id,
                tags=to_cfn_tags(args.tags),
            )
            for i, route in enumerate(args.routes):
                cfn_route = ec2.CfnRoute(
                    self.scope,
                    f"Route-{name}-{i}",
                    route_table_id=route_table.ref,
                    destination_cidr_block=route.cidr_block,
                    gateway_id=route.gateway_id,
                    nat_gateway_id=route.nat_gateway_id,
                )
                attachment = self._gateway_attachments.get(route.gateway_id)
                if attachment is not None:
                    cfn_route.node.add_dependency(attachment)
        return Resource(kind="route_table", name=name, id=route_table.ref)

    def create_route_table_association(self, name, args):
        with self._provisioning("route table association", name):
            association = ec2.CfnSubnetRouteTableAssociation(
                self.scope,
                f"RouteTableAssociation-{name}",
                route_table_id=args.route_table_id,
                subnet_id=args.subnet_id,
            )
        return Resource(
            kind="route_table_association", name=name, id=association.ref
        )

    def create_subnet(self, name, args):
        with self._provisioning("subnet", name):
            subnet = ec2.CfnSubnet(
                self.scope,
                f"Subnet-{name}",
                vpc_id=args.vpc_id,
                cidr_block=args.cidr_block,
                availability_zone=args.availability_zone,
                tags=to_cfn_tags(args.tags),
            )
        return Resource(
            kind="subnet",
            name=name,
            id=subnet.ref,
            outputs={"availability_zone": subnet.attr_availability_zone},
        )

    def create_eip(self, name, args):
        with self._provisioning("elastic IP", name):
            eip = ec2.CfnEIP(
                self.scope, f"Eip-{name}", domain="vpc", tags=to_cfn_tags(args.tags)
            )
        return Resource(
            kind="eip",
            name=name,
            id=eip.ref,
            outputs={
                "allocation_id": eip.attr_allocation_id,
                "public_ip": eip.attr_public_ip,
            },
        )

    def create_nat_gateway(self, name, args):
        with self._provisioning("NAT gateway", name):
            nat_gateway = ec2.CfnNatGateway(
                self.scope,
                f"NatGateway-{name}",
                subnet_id=args.subnet_id,
                allocation_id=args.allocation_id,
                tags=to_cfn_tags(args.tags),
            )
            # The NAT gateway can only reach the internet once the VPC has
            # an attached internet gateway
            for attachment in self._gateway_attachments.values():
                nat_gateway.node.add_dependency(attachment)
        return Resource(kind="nat_gateway", name=name, id=nat_gateway.ref)

    def create_flow_log(self, name, args):
        with self._provisioning("flow log", name):
            flow_log = ec2.CfnFlowLog(
                self.scope,
                f"FlowLog-{name}",
                resource_id=args.vpc_id,
                resource_type="VPC",
                traffic_type=args.traffic_type,
                log_destination_type=args.log_destination_type,
                log_destination=args.log_destination,
                tags=to_cfn_tags(args.tags),
            )
            options = args.destination_options
            if options is not None:
                destination_options = {
                    key: value
                    for key, value in (
                        ("FileFormat", options.file_format),
                        (
                            "HiveCompatiblePartitions",
                            options.hive_compatible_partitions,
                        ),
                        ("PerHourPartition", options.per_hour_partition),
                    )
                    if value is not None
                }
                flow_log.add_property_override(
                    "DestinationOptions", destination_options
                )
        return Resource(kind="flow_log", name=name, id=flow_log.ref)
