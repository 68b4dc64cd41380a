import argparse
import os

import boto3

STACK_NAME = "UserOnboardingStack"

# CDK may suffix output keys with a hash, so these are matched by substring
OUTPUT_KEYS = {
    "OneTimePasswordSecretArn": "ONE_TIME_PASSWORD_SECRET_ARN",
    "EC2UserEmailParameterName": "EC2_USER_EMAIL_PARAMETER",
    "S3UserEmailParameterName": "S3_USER_EMAIL_PARAMETER",
    "LambdaFunctionName": "NOTIFIER_FUNCTION_NAME",
    "EventBridgeRuleName": "USER_CREATION_RULE_NAME",
}


def collect_outputs(cfn, stack_name=STACK_NAME):
    print(f"Fetching outputs for stack: {stack_name}...")
    try:
        response = cfn.describe_stacks(StackName=stack_name)
    except cfn.exceptions.ClientError as e:
        print(f"Error fetching stack {stack_name}: {e}")
        print("Please ensure the stack is deployed and the name is correct.")
        return {}

    outputs = response['Stacks'][0].get('Outputs', [])

    config = {}
    for o in outputs:
        key = o['OutputKey']
        for output_key, env_name in OUTPUT_KEYS.items():
            if output_key in key:
                config[env_name] = o['OutputValue']
    return config


def write_env(config, env_path):
    env_content = "\n".join([f"{k}={v}" for k, v in config.items()])
    print(f"Writing config to {env_path}...")
    with open(env_path, "w") as f:
        f.write(env_content + "\n")


def main(argv=None, cfn=None):
    parser = argparse.ArgumentParser(description="Write the onboarding stack outputs to an env file")
    parser.add_argument("--stack-name", default=STACK_NAME)
    parser.add_argument(
        "--output",
        default=os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "stack-outputs.env"),
    )
    args = parser.parse_args(argv)

    if cfn is None:
        cfn = boto3.client('cloudformation')

    config = collect_outputs(cfn, args.stack_name)
    if not config:
        print("No relevant outputs found. Is the stack deployed?")
        return 1

    write_env(config, args.output)
    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
