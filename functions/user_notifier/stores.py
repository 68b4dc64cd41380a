import json
from typing import Optional, Protocol


class DirectoryEntryNotFound(Exception):
    def __init__(self, key: str) -> None:
        super().__init__(f"No directory entry for {key}")
        self.key = key


class DirectoryStore(Protocol):
    def get(self, key: str) -> str: ...


class SecretStore(Protocol):
    def get_secret(self, secret_id: str) -> str: ...


class ParameterStoreDirectory:
    """
    Read-only view of SSM Parameter Store.
    """
    def __init__(self, client) -> None:
        self.client = client

    def get(self, key: str) -> str:
        try:
            response = self.client.get_parameter(Name=key)
        except self.client.exceptions.ParameterNotFound:
            raise DirectoryEntryNotFound(key) from None
        return response["Parameter"]["Value"]


class SecretsManagerStore:
    def __init__(self, client) -> None:
        self.client = client

    def get_secret(self, secret_id: str) -> str:
        response = self.client.get_secret_value(SecretId=secret_id)
        return response["SecretString"]


def extract_secret_field(payload: str, field: Optional[str]) -> str:
    """
    Pull one field out of a JSON secret.

    Secrets created with GenerateSecretString and no template are a bare
    string, so anything that is not a JSON object is returned as-is.
    """
    if not field:
        return payload
    try:
        document = json.loads(payload)
    except ValueError:
        return payload
    if not isinstance(document, dict):
        return payload
    return document[field]
