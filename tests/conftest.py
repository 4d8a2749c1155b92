"""Setup items for all test types."""

import pytest
from moto import mock_aws


@pytest.fixture()
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing reaches AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-west-2")


@pytest.fixture()
def mocked_ec2(aws_credentials):
    """Run the test against moto's EC2 backend."""
    with mock_aws():
        yield
