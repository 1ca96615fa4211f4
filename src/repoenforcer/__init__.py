"""repoenforcer - ban undeclared artifact repositories across a configuration chain."""

__version__ = "0.1.0"
