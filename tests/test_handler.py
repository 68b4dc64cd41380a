import io
import json
import uuid

import pytest
from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from user_notifier import handler


@pytest.fixture
def deployed(aws_session, monkeypatch):
    ssm = aws_session.client("ssm")
    ssm.put_parameter(Name="/iam/users/ec2-user/email", Value="ec2-user@example.com", Type="String")
    aws_session.client("secretsmanager").create_secret(Name="OneTimePassword", SecretString="Zk3pQ9rT1wXy7uVb")

    def install(environ):
        monkeypatch.setattr(handler, "_notifier", handler.build_notifier(environ, aws_session))

    return install


def test_lambda_handler(deployed, sample_event, lambda_context):
    deployed({})

    response = handler.lambda_handler(sample_event, lambda_context)

    assert response == {
        "statusCode": 200,
        "body": json.dumps("Processed user creation event for: ec2-user"),
    }


def test_lambda_handler_unknown_user(deployed, lambda_context):
    deployed({})

    response = handler.lambda_handler({"detail": {}}, lambda_context)

    assert response["statusCode"] == 200
    assert "unknown" in response["body"]


def test_lambda_handler_with_secret(deployed, sample_event, lambda_context):
    deployed({"NOTIFIER_SECRET_ID": "OneTimePassword"})

    assert handler.get_notifier().secrets is not None
    assert handler.lambda_handler(sample_event, lambda_context)["statusCode"] == 200


def test_lambda_handler_missing_secret_raises(deployed, sample_event, lambda_context):
    deployed({"NOTIFIER_SECRET_ID": "DoesNotExist"})

    with pytest.raises(ClientError):
        handler.lambda_handler(sample_event, lambda_context)


def test_build_notifier_reads_settings(aws_session):
    notifier = handler.build_notifier({"NOTIFIER_LOG_EMAIL": "false"}, aws_session)

    assert notifier.settings.log_email is False
    assert notifier.secrets is None
    assert notifier.logger is handler.logger


def test_notifier_is_built_once(aws_session, monkeypatch):
    monkeypatch.setattr(handler, "_notifier", None)

    first = handler.get_notifier()

    assert handler.get_notifier() is first


@pytest.fixture
def powertools_log():
    stream = io.StringIO()
    log = Logger(service=f"user-notifier-{uuid.uuid4().hex}", stream=stream)

    def lines():
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return log, lines


def test_powertools_record_has_user_and_email(deployed, sample_event, aws_session, powertools_log):
    deployed({})
    log, lines = powertools_log

    handler.build_notifier({}, aws_session, log=log).handle(sample_event)

    [record] = [line for line in lines() if line["message"] == "User creation detected"]
    assert record["level"] == "INFO"
    assert record["user_name"] == "ec2-user"
    assert record["email"] == "ec2-user@example.com"


def test_powertools_error_record_has_event(deployed, sample_event, aws_session, powertools_log):
    deployed({})
    log, lines = powertools_log
    notifier = handler.build_notifier({"NOTIFIER_SECRET_ID": "DoesNotExist"}, aws_session, log=log)

    with pytest.raises(ClientError):
        notifier.handle(sample_event)

    [record] = [line for line in lines() if line["message"] == "Error processing event"]
    assert record["level"] == "ERROR"
    assert record["event"] == sample_event
    assert "ResourceNotFoundException" in record["error"]
