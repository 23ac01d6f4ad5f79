"""
Operator configuration for aws-setter.
"""

from .setter_config import SetterConfig
