"""Configure the VPC topology."""

from aws_cdk import CfnOutput, Fn
from constructs import Construct

from topology_builder.constructs.cdk_provisioner import CdkResourceProvisioner
from topology_builder.models import TopologyRequest
from topology_builder.vpc import build_topology


class VpcConstruct(Construct):
    """VPC with public and private subnets, gateways and flow logs."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        request: TopologyRequest,
        **kwargs,
    ) -> None:
        """VpcConstruct constructor.

        Parameters
        ----------
        scope : Construct
            Parent construct.
        construct_id : str
            A unique string identifier for this construct.
        request : TopologyRequest
            The topology to create. It is validated before any resource is
            declared.
        kwargs : dict
            Keyword arguments

        """
        super().__init__(scope, construct_id, **kwargs)
        self.result = build_topology(CdkResourceProvisioner(self), request)

        CfnOutput(self, "VpcId", value=self.result.network_container.id)
        if self.result.public_subnets:
            CfnOutput(
                self,
                "PublicSubnetIds",
                value=Fn.join(
                    ",", [subnet.id for subnet in self.result.public_subnets]
                ),
            )
        if self.result.private_subnets:
            CfnOutput(
                self,
                "PrivateSubnetIds",
                value=Fn.join(
                    ",", [subnet.id for subnet in self.result.private_subnets]
                ),
            )

    @property
    def vpc_id(self):
        """Return the VPC id token."""
        return self.result.network_container.id

    @property
    def public_subnet_ids(self):
        """Return the public subnet id tokens in availability zone order."""
        return [subnet.id for subnet in self.result.public_subnets]

    @property
    def private_subnet_ids(self):
        """Return the private subnet id tokens in availability zone order."""
        return [subnet.id for subnet in self.result.private_subnets]
