#!/usr/bin/env python3
"""
aws-setter

Run aws-setter from a checkout without installing it:

    python3 scripts/aws_setter.py assume --profile dev
"""

import sys
from pathlib import Path

# Add the parent directory to sys.path to import aws_setter
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from aws_setter.cli import main

if __name__ == "__main__":
    sys.exit(main())
