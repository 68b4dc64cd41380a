import argparse
import json

import boto3

from user_notifier.events import EventName


def build_event(user_name, event_name=EventName.CREATE_USER):
    """The EventBridge envelope CloudTrail delivers for an IAM API call."""
    return {
        "version": "0",
        "source": "aws.iam",
        "detail-type": "AWS API Call via CloudTrail",
        "detail": {
            "eventSource": "iam.amazonaws.com",
            "eventName": event_name,
            "requestParameters": {"userName": user_name},
        },
    }


def invoke(lambda_client, function_name, event):
    response = lambda_client.invoke(
        FunctionName=function_name,
        InvocationType="RequestResponse",
        Payload=json.dumps(event).encode("utf-8"),
    )
    payload = json.loads(response["Payload"].read())
    return response.get("FunctionError"), payload


def main(argv=None, lambda_client=None):
    parser = argparse.ArgumentParser(description="Send a sample user creation event to the notifier")
    parser.add_argument("function_name")
    parser.add_argument("--user-name", default="ec2-user")
    parser.add_argument(
        "--event-name",
        default=EventName.CREATE_USER,
        choices=[EventName.CREATE_USER, EventName.CREATE_LOGIN_PROFILE],
    )
    args = parser.parse_args(argv)

    if lambda_client is None:
        lambda_client = boto3.client("lambda")

    error, payload = invoke(lambda_client, args.function_name, build_event(args.user_name, args.event_name))
    print(json.dumps(payload, indent=2))
    if error:
        print(f"Function returned an error: {error}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
