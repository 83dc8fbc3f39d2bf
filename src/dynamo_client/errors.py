from __future__ import annotations


class DynamoClientError(Exception):
    pass


class InvalidConfigurationError(DynamoClientError):
    pass


class TemplateSyntaxError(InvalidConfigurationError):
    def __init__(self, *, literal: str, detail: str) -> None:
        super().__init__(f"invalid key template {literal!r}: {detail}")
        self.literal = literal
        self.detail = detail


class MissingRequiredVariableError(DynamoClientError):
    def __init__(self, key: str) -> None:
        super().__init__(f"missing required value for {key}")
        self.key = key


class ValidationError(DynamoClientError):
    pass


class InvalidStateError(DynamoClientError):
    pass
