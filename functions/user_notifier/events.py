from dataclasses import dataclass

UNKNOWN = "unknown"


class EventName:
    CREATE_USER = "CreateUser"
    CREATE_LOGIN_PROFILE = "CreateLoginProfile"


@dataclass(frozen=True)
class UserCreationEvent:
    """
    The parts of a CloudTrail "AWS API Call" event the notifier cares about.
    """
    event_source: str
    event_name: str
    user_name: str

    @classmethod
    def from_event(cls, event: dict) -> "UserCreationEvent":
        # Filtering happens in the EventBridge rule, so anything missing
        # here is reported as unknown rather than rejected.
        detail = event.get("detail") or {}
        request_parameters = detail.get("requestParameters") or {}
        return cls(
            event_source=detail.get("eventSource") or UNKNOWN,
            event_name=detail.get("eventName") or UNKNOWN,
            user_name=request_parameters.get("userName") or UNKNOWN,
        )
