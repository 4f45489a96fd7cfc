"""Infer habitual working hours from workstation activity evidence."""

__version__ = "0.1.0"
