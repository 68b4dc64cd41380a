import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_EMAIL_PARAMETER_TEMPLATE = "/iam/users/{user_name}/email"
DEFAULT_NOT_FOUND_SENTINEL = "Not found in SSM"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigurationError(Exception):
    pass


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class NotifierSettings:
    """
    Settings for the notifier, resolved once per cold start.
    """
    email_parameter_template: str = DEFAULT_EMAIL_PARAMETER_TEMPLATE
    not_found_sentinel: str = DEFAULT_NOT_FOUND_SENTINEL
    log_email: bool = True
    secret_id: Optional[str] = None
    secret_field: Optional[str] = None

    def __post_init__(self) -> None:
        if "{user_name}" not in self.email_parameter_template:
            raise ConfigurationError(
                "email_parameter_template must contain a {user_name} placeholder"
            )

    def email_parameter_name(self, user_name: str) -> str:
        return self.email_parameter_template.format(user_name=user_name)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NotifierSettings":
        if environ is None:
            environ = os.environ

        log_email = environ.get("NOTIFIER_LOG_EMAIL")
        return cls(
            email_parameter_template=environ.get(
                "NOTIFIER_EMAIL_PARAMETER_TEMPLATE", DEFAULT_EMAIL_PARAMETER_TEMPLATE
            ),
            not_found_sentinel=environ.get(
                "NOTIFIER_NOT_FOUND_SENTINEL", DEFAULT_NOT_FOUND_SENTINEL
            ),
            log_email=True if log_email is None else _parse_bool("NOTIFIER_LOG_EMAIL", log_email),
            # Empty strings come through from CDK when a value is not wired
            secret_id=environ.get("NOTIFIER_SECRET_ID") or None,
            secret_field=environ.get("NOTIFIER_SECRET_FIELD") or None,
        )
