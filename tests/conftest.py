import pytest
from moto import mock_aws

from rest_framework.test import APIClient

from modules.core.dynamodb import create_products_table, get_dynamodb_resource
from modules.products.repositories import _shared_memory_repository


@pytest.fixture()
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches for a real AWS profile."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture()
def mocked_aws(aws_credentials, settings):
    """moto-backed AWS with the app pointed at the DynamoDB backend."""
    settings.PRODUCTS_REPOSITORY_BACKEND = "dynamodb"
    settings.DYNAMODB_ENDPOINT_URL = None
    with mock_aws():
        yield


@pytest.fixture()
def dynamodb_table(mocked_aws, settings):
    """An empty products table inside the moto sandbox."""
    return create_products_table(get_dynamodb_resource(), settings.PRODUCTS_TABLE)


@pytest.fixture()
def memory_backend(settings):
    """Point the app at a fresh process-local in-memory repository."""
    settings.PRODUCTS_REPOSITORY_BACKEND = "memory"
    _shared_memory_repository.cache_clear()
    yield
    _shared_memory_repository.cache_clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
