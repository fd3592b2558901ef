import pytest

from cfnplugin.handler.request import RequestContext, ResourceRequest


@pytest.fixture
def request_context():
    return RequestContext(
        stack_id="arn:aws:cloudformation:us-east-1:000000000000:stack/my-stack/1",
        region="us-east-1",
        account_id="000000000000",
        stack_tags={"team": "storage"},
        system_tags={"aws:cloudformation:stack-name": "my-stack"},
        resource_type="Test::Storage::Bucket",
    )


@pytest.fixture
def create_request(request_context):
    def _create(
        properties=b"", previous_properties=b"", type_configuration=b"", callback_context=None
    ) -> ResourceRequest:
        return ResourceRequest(
            logical_resource_id="MyBucket",
            callback_context=callback_context or {},
            request_context=request_context,
            previous_properties_body=previous_properties,
            properties_body=properties,
            type_configuration_body=type_configuration,
        )

    return _create
