"""Locate TypeScript class methods and turn them into NestJS REPL invocations."""

__version__ = "0.1.0"
