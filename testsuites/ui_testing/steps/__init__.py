"""
================================================================================
Step Definitions
================================================================================

BDD-style Given/When/Then step classes built on BaseStep.

================================================================================
"""

from .login_steps import LoginSteps

__all__ = [
    "LoginSteps",
]
