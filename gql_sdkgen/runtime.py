"""Runtime support for generated sdk modules.

Generated code imports these names. The transport is not provided: callers
pass a requester that executes a document and returns a ``Response``.

Example:
    async def requester(document, variables, options=None):
        data = await post_to_my_endpoint(document, variables)
        return Response(status=Status.SUCCESS, data=data)

    sdk = create_raw_sdk(requester)
    team = await sdk.team("team-id")
    issues = await team.issues()
"""

from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import Any, Awaitable, Callable, Generic, Mapping, Protocol, TypeVar

T = TypeVar("T")

RequestOptions = Mapping[str, Any]


class Status(Enum):
    """Outcome of a request."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Response(Generic[T]):
    """Normalised result of running an operation."""
    status: Status
    data: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


class OperationSet(SimpleNamespace):
    """A set of operations exposed as attributes.

    Chained results are operation sets too, carrying the response
    attributes next to the scoped operations.
    """


class Requester(Protocol):
    """Executes a GraphQL document with its variables."""

    def __call__(
        self,
        document: str,
        variables: Mapping[str, Any] | None,
        options: RequestOptions | None = None,
    ) -> Awaitable[Response[Any]]:
        ...


Wrapper = Callable[[Callable[[], Awaitable[Response[Any]]]], Awaitable[Response[Any]]]


async def default_wrapper(action: Callable[[], Awaitable[Response[Any]]]) -> Response[Any]:
    """Run the operation without any extra processing."""
    return await action()
