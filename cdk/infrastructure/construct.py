import os

from aws_cdk import (
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
    aws_secretsmanager as secretsmanager,
    Duration,
    RemovalPolicy,
    Stack,
)
from constructs import Construct

FUNCTIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "functions")

USER_CREATION_EVENTS = ["CreateUser", "CreateLoginProfile"]

POWERTOOLS_LAYER = "arn:aws:lambda:{region}:017000801446:layer:AWSLambdaPowertoolsPythonV3-python312-x86_64:7"


class UserNotifierFunction(Construct):
    """
    The user creation notifier Lambda and the EventBridge rule that feeds it.
    """
    def __init__(self, scope: Construct, construct_id: str,
                 parameter_prefix: str = "/iam/users",
                 secret: secretsmanager.ISecret = None,
                 log_email: bool = True,
                 **kwargs) -> None:
        super().__init__(scope, construct_id)

        stack = Stack.of(self)

        self.log_group = logs.LogGroup(
            self,
            "LogGroup",
            retention=logs.RetentionDays.ONE_WEEK,
            removal_policy=RemovalPolicy.DESTROY,
        )

        environment = {
            "POWERTOOLS_SERVICE_NAME": "user-notifier",
            "POWERTOOLS_LOG_LEVEL": "INFO",
            "NOTIFIER_EMAIL_PARAMETER_TEMPLATE": f"{parameter_prefix}/{{user_name}}/email",
            "NOTIFIER_LOG_EMAIL": "true" if log_email else "false",
        }
        if secret is not None:
            environment["NOTIFIER_SECRET_ID"] = secret.secret_arn

        self.function = lambda_.Function(
            self,
            "Function",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="user_notifier.handler.lambda_handler",
            code=lambda_.Code.from_asset(
                FUNCTIONS_DIR,
                exclude=["**/__pycache__", "*.egg-info"],
            ),
            architecture=lambda_.Architecture.X86_64,
            memory_size=128,
            timeout=Duration.seconds(10),
            layers=[
                lambda_.LayerVersion.from_layer_version_arn(
                    self, "Powertools",
                    layer_version_arn=POWERTOOLS_LAYER.format(region=stack.region),
                )
            ],
            log_group=self.log_group,
            environment=environment,
            **kwargs,
        )

        # Read access to the email parameters only
        self.function.add_to_role_policy(iam.PolicyStatement(
            actions=["ssm:GetParameter"],
            resources=[
                stack.format_arn(
                    service="ssm",
                    resource="parameter",
                    resource_name=f"{parameter_prefix.strip('/')}/*",
                )
            ],
        ))

        if secret is not None:
            secret.grant_read(self.function)

        # CloudTrail delivers IAM API calls to the default bus
        self.rule = events.Rule(
            self,
            "UserCreationRule",
            event_pattern=events.EventPattern(
                source=["aws.iam"],
                detail_type=["AWS API Call via CloudTrail"],
                detail={
                    "eventSource": ["iam.amazonaws.com"],
                    "eventName": USER_CREATION_EVENTS,
                },
            ),
            targets=[targets.LambdaFunction(self.function)],
        )
