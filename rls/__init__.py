"""rls: classify commits and publish them as a GitHub release."""

__version__ = "0.1.0"

NAME = "rls"
