from aws_cdk import (
    Stack,
    CfnOutput,
    CfnParameter,
)
from constructs import Construct
from infrastructure.construct import UserNotifierFunction
from infrastructure.directory import UserDirectory, UserSpec

PARAMETER_PREFIX = "/iam/users"


def _context_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class UserOnboardingStack(Stack):
    """
    IAM users and groups, plus a Lambda that logs each user creation.
    """
    def __init__(self, scope: Construct, construct_id: str,
                 include_one_time_password: bool = None,
                 **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        if include_one_time_password is None:
            include_one_time_password = _context_flag(
                self.node.try_get_context("include_one_time_password")
            )

        ec2_user_email = CfnParameter(self, "EC2UserEmail",
            type="String",
            description="Email address for ec2-user",
        )
        s3_user_email = CfnParameter(self, "S3UserEmail",
            type="String",
            description="Email address for s3-user",
        )

        # 1. Users, groups, secret and email parameters
        directory = UserDirectory(self, "Directory",
            parameter_prefix=PARAMETER_PREFIX,
            users=[
                UserSpec(
                    user_name="ec2-user",
                    group_name="EC2UserGroup",
                    policy_name="EC2ReadAccess",
                    actions=["ec2:Describe*"],
                    email=ec2_user_email.value_as_string,
                ),
                UserSpec(
                    user_name="s3-user",
                    group_name="S3UserGroup",
                    policy_name="S3ReadAccess",
                    actions=["s3:Get*", "s3:List*"],
                    email=s3_user_email.value_as_string,
                ),
            ],
        )

        # 2. Notifier and its EventBridge rule
        notifier = UserNotifierFunction(self, "Notifier",
            parameter_prefix=PARAMETER_PREFIX,
            secret=directory.secret if include_one_time_password else None,
        )

        # The rule has to exist before the users, or their creation is missed
        for user in directory.users.values():
            user.node.add_dependency(notifier.rule)

        # Outputs
        CfnOutput(self, "OneTimePasswordSecretArn",
            description="ARN of the One-Time Password Secret",
            value=directory.secret.secret_arn)
        CfnOutput(self, "EC2UserEmailParameterName",
            description="Name of the EC2 User Email Parameter",
            value=directory.email_parameters["ec2-user"].parameter_name)
        CfnOutput(self, "S3UserEmailParameterName",
            description="Name of the S3 User Email Parameter",
            value=directory.email_parameters["s3-user"].parameter_name)
        CfnOutput(self, "LambdaFunctionName",
            description="Name of the User Details Logging Lambda Function",
            value=notifier.function.function_name)
        CfnOutput(self, "EventBridgeRuleName",
            description="Name of the EventBridge Rule for User Creation",
            value=notifier.rule.rule_name)
