"""servergen -- interactive Express backend project scaffolder."""

__version__ = "0.1.0"
