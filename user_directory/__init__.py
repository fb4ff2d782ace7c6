"""User directory: DynamoDB-backed user records behind a JSON API and an HTML form UI."""

__version__ = "0.1.0"
