"""Core infrastructure: settings, logging, exceptions, packaged defaults."""
