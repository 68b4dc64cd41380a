#!/usr/bin/env python3
import aws_cdk as cdk
from infrastructure.stack import UserOnboardingStack

app = cdk.App()

UserOnboardingStack(app, "UserOnboardingStack")

app.synth()
