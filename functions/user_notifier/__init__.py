"""Lambda function that logs newly created IAM users and their email."""
from user_notifier.events import EventName, UserCreationEvent
from user_notifier.notifier import HandlerResult, UserCreationNotifier

__all__ = ["EventName", "HandlerResult", "UserCreationEvent", "UserCreationNotifier"]
