from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any


@dataclass
class FakeLambdaContext:
    function_name: str = "ambient-alerts-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:ambient-alerts-test"
    aws_request_id: str = "00000000-0000-0000-0000-000000000000"


class FakeSender:
    """Stands in for PushSender; records each multicast call."""

    def __init__(self, failure_count: int = 0, error: Exception | None = None) -> None:
        self.calls: list[tuple[dict[str, str], list[str]]] = []
        self.failure_count = failure_count
        self.error = error

    def send_multicast(self, data: dict[str, str], tokens: list[str]) -> Any:
        self.calls.append((data, tokens))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(success_count=len(tokens) - self.failure_count, failure_count=self.failure_count)
