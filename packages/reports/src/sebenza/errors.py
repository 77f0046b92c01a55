"""Exception hierarchy for Sebenza reporting."""

from typing import Any


class SebenzaError(Exception):
    """Base exception for all Sebenza errors."""

    pass


class DatasetError(SebenzaError):
    """A dataset file is missing or malformed."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class FlowError(SebenzaError):
    """Base error for prompt flow failures."""

    def __init__(self, flow_name: str, message: str, details: Any = None):
        super().__init__(f"Flow '{flow_name}' failed: {message}")
        self.flow_name = flow_name
        self.details = details


class FlowInputError(FlowError):
    """Flow input did not match the declared input schema."""

    pass


class FlowOutputError(FlowError):
    """Model output was missing or did not match the declared output schema."""

    pass


class GenerationError(SebenzaError):
    """The model provider call failed."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider} generation failed: {message}")
        self.provider = provider
