import os

import boto3
from aws_lambda_powertools import Logger

from user_notifier.config import NotifierSettings
from user_notifier.notifier import UserCreationNotifier
from user_notifier.stores import ParameterStoreDirectory, SecretsManagerStore

logger = Logger(service="user-notifier")

_notifier = None


def build_notifier(environ=None, session=None, log=None) -> UserCreationNotifier:
    if environ is None:
        environ = os.environ
    if session is None:
        session = boto3.session.Session()

    settings = NotifierSettings.from_env(environ)
    secrets = None
    if settings.secret_id:
        secrets = SecretsManagerStore(session.client("secretsmanager"))

    return UserCreationNotifier(
        directory=ParameterStoreDirectory(session.client("ssm")),
        settings=settings,
        logger=log or logger,
        secrets=secrets,
    )


def get_notifier() -> UserCreationNotifier:
    global _notifier
    if _notifier is None:
        _notifier = build_notifier()
    return _notifier


@logger.inject_lambda_context
def lambda_handler(event, context):
    return get_notifier().handle(event).as_dict()
