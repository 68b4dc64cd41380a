import json
from dataclasses import dataclass
from typing import Optional

from user_notifier.config import NotifierSettings
from user_notifier.events import UserCreationEvent
from user_notifier.stores import (
    DirectoryEntryNotFound,
    DirectoryStore,
    SecretStore,
    extract_secret_field,
)


@dataclass(frozen=True)
class HandlerResult:
    status_code: int
    body: str

    def as_dict(self) -> dict:
        return {"statusCode": self.status_code, "body": self.body}


class UserCreationNotifier:
    """
    Logs each IAM user creation together with the email stored for the user.

    Stateless: the same event always produces the same log record and result.
    Failures other than a missing directory entry are logged with the raw
    event and re-raised so the Lambda runtime can apply its retry policy.
    """
    def __init__(
        self,
        directory: DirectoryStore,
        settings: NotifierSettings,
        logger,
        secrets: Optional[SecretStore] = None,
    ) -> None:
        self.directory = directory
        self.settings = settings
        self.logger = logger
        self.secrets = secrets

    def handle(self, event: dict) -> HandlerResult:
        try:
            user_event = UserCreationEvent.from_event(event)
            email = self._lookup_email(user_event.user_name)

            fields = {
                "user_name": user_event.user_name,
                "event_name": user_event.event_name,
                "event_source": user_event.event_source,
            }
            if self.settings.log_email:
                fields["email"] = email
            if self.secrets is not None and self.settings.secret_id:
                # Only whether it resolved is logged, never the password.
                fields["one_time_password_available"] = bool(self._one_time_password())

            self.logger.info("User creation detected", **fields)

            return HandlerResult(
                status_code=200,
                body=json.dumps(f"Processed user creation event for: {user_event.user_name}"),
            )
        except Exception as e:
            self.logger.error("Error processing event", error=str(e), event=event)
            raise

    def _lookup_email(self, user_name: str) -> str:
        key = self.settings.email_parameter_name(user_name)
        try:
            return self.directory.get(key)
        except DirectoryEntryNotFound:
            self.logger.warning("No email parameter found for user", user_name=user_name, parameter=key)
            return self.settings.not_found_sentinel

    def _one_time_password(self) -> str:
        payload = self.secrets.get_secret(self.settings.secret_id)
        return extract_secret_field(payload, self.settings.secret_field)
