import copy
from dataclasses import dataclass

import boto3
import pytest
from moto import mock_aws

from user_notifier.stores import DirectoryEntryNotFound

SAMPLE_EVENT = {
    "detail": {
        "eventSource": "iam.amazonaws.com",
        "eventName": "CreateUser",
        "requestParameters": {"userName": "ec2-user"},
    }
}


class RecordingLogger:
    def __init__(self):
        self.records = []

    def _record(self, level, msg, kwargs):
        self.records.append((level, msg, kwargs))

    def info(self, msg, **kwargs):
        self._record("INFO", msg, kwargs)

    def warning(self, msg, **kwargs):
        self._record("WARNING", msg, kwargs)

    def error(self, msg, **kwargs):
        self._record("ERROR", msg, kwargs)

    def at(self, level):
        return [r for r in self.records if r[0] == level]


class InMemoryDirectory:
    def __init__(self, entries=None):
        self.entries = dict(entries or {})
        self.lookups = []

    def get(self, key):
        self.lookups.append(key)
        if key not in self.entries:
            raise DirectoryEntryNotFound(key)
        return self.entries[key]


class InMemorySecrets:
    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})

    def get_secret(self, secret_id):
        return self.secrets[secret_id]


@dataclass
class LambdaContext:
    function_name: str = "user-notifier"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:user-notifier"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def sample_event():
    return copy.deepcopy(SAMPLE_EVENT)


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def lambda_context():
    return LambdaContext()


@pytest.fixture
def aws_session(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    with mock_aws():
        yield boto3.session.Session(region_name="us-east-1")
