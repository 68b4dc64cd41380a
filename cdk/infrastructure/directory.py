from dataclasses import dataclass
from typing import List

from aws_cdk import (
    aws_iam as iam,
    aws_secretsmanager as secretsmanager,
    aws_ssm as ssm,
)
from constructs import Construct


@dataclass(frozen=True)
class UserSpec:
    user_name: str
    group_name: str
    policy_name: str
    actions: List[str]
    email: str


class UserDirectory(Construct):
    """
    IAM groups and users, the one-time password they sign in with, and the
    email parameters the notifier reads.
    """
    def __init__(self, scope: Construct, construct_id: str,
                 users: List[UserSpec],
                 parameter_prefix: str = "/iam/users",
                 **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # 1. One-time password shared by the initial login profiles
        self.secret = secretsmanager.Secret(self, "OneTimePasswordSecret",
            secret_name="OneTimePassword",
            description="Temporary password for IAM users",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                password_length=16,
                exclude_characters='"@/\\',
            ),
        )

        self.groups = {}
        self.users = {}
        self.email_parameters = {}

        for spec in users:
            # 2. Group with a read-only inline policy
            group = iam.Group(self, spec.group_name, group_name=spec.group_name)
            group.attach_inline_policy(iam.Policy(self, spec.policy_name,
                policy_name=spec.policy_name,
                statements=[
                    iam.PolicyStatement(actions=spec.actions, resources=["*"]),
                ],
            ))
            self.groups[spec.group_name] = group

            # 3. User, forced to change the password on first sign-in
            self.users[spec.user_name] = iam.User(self, f"User-{spec.user_name}",
                user_name=spec.user_name,
                groups=[group],
                password=self.secret.secret_value,
                password_reset_required=True,
            )

            # 4. Email looked up by the notifier
            self.email_parameters[spec.user_name] = ssm.StringParameter(self, f"Email-{spec.user_name}",
                parameter_name=f"{parameter_prefix}/{spec.user_name}/email",
                string_value=spec.email,
            )
