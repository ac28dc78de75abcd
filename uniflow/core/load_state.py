"""Load state of a paginated collection.

A ``LoadState`` is exactly one of four variants. Consumers switch on the
variant with ``isinstance`` and read its payload:

    if isinstance(state, Loaded):
        render(state.items, more=state.cursor is not None)
    elif isinstance(state, Failed):
        show_error(state.error.message)

``Loading`` and ``Loaded`` carry a ``cursor``: the token for the page being
fetched (``Loading``) or the next page to fetch (``Loaded``). A ``Loaded``
state with ``cursor=None`` means there are no further pages.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from uniflow.core.errors import ErrorCategory, classify_error
from uniflow.core.immutable_list import ImmutableList

if TYPE_CHECKING:
    from uniflow.core.page_fetcher import PageToken

T = TypeVar("T")


@dataclass(frozen=True)
class Fault:
    """Human-readable description of a failed load.

    Attributes:
        message: What went wrong. Never empty.
        status: The HTTP status code, when the failure came from a response.
        category: Classification of the failure.
    """

    message: str
    status: int | None = None
    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", "Unknown error")

    @classmethod
    def from_exception(cls, ex: Exception) -> "Fault":
        """Build a fault from an exception, keeping any status it carries."""
        return cls(
            message=str(ex) or type(ex).__name__,
            status=getattr(ex, "status", None),
            category=classify_error(ex),
        )


@dataclass(frozen=True)
class Uninitialized:
    """No fetch has started yet."""


@dataclass(frozen=True)
class Loading(Generic[T]):
    """A fetch is in flight.

    Attributes:
        items: Items accumulated before this fetch.
        cursor: Token of the page being fetched.
    """

    items: ImmutableList[T] = field(default_factory=ImmutableList)
    cursor: "PageToken | None" = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, ImmutableList):
            object.__setattr__(self, "items", ImmutableList(self.items))


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """The most recent fetch succeeded.

    Attributes:
        items: All items accumulated so far.
        cursor: Token of the next page, or None when the collection is complete.
    """

    items: ImmutableList[T] = field(default_factory=ImmutableList)
    cursor: "PageToken | None" = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, ImmutableList):
            object.__setattr__(self, "items", ImmutableList(self.items))


@dataclass(frozen=True)
class Failed:
    """The most recent fetch failed. Accumulated items are not carried."""

    error: Fault


LoadState = Union[Uninitialized, Loading[T], Loaded[T], Failed]


def is_terminal(state: "LoadState[Any]") -> bool:
    """Return True when the collection is fully loaded."""
    return isinstance(state, Loaded) and state.cursor is None


def items_of(state: "LoadState[T]") -> ImmutableList[T]:
    """Return the items a state carries, or an empty list."""
    if isinstance(state, (Loading, Loaded)):
        return state.items
    return ImmutableList.empty()
