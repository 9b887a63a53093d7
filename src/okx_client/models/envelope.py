"""
Response envelope shared by every OKX REST endpoint.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """{code, msg, data: [...]} envelope with typed data items."""
    code: str
    msg: str
    data: List[T] = field(default_factory=list)

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        parser: Callable[[Dict[str, Any]], T],
    ) -> "ApiResponse[T]":
        """Build an envelope, parsing each data item with the endpoint's parser."""
        items = payload.get("data") or []
        if not isinstance(items, list):
            items = [items]
        return cls(
            code=str(payload.get("code", "")),
            msg=str(payload.get("msg", "")),
            data=[parser(item) for item in items if isinstance(item, dict)],
        )

    @property
    def first(self) -> T:
        """First data item; raises IndexError when data is empty."""
        return self.data[0]
