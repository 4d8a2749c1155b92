"""Build VPC network topologies as CDK constructs."""
