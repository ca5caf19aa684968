"""Building blocks for command-line tools: flags, spinner, logging, filesystem and template helpers."""

__version__ = "0.1.0"