from typing import Protocol, Sequence, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class PageSource(Protocol[T_co]):
    """Data source contract consumed by the list machine."""

    async def fetch_page(self, limit: int, offset: int) -> Sequence[T_co]:
        """
        Return up to *limit* items starting at *offset*, in order.
        Fewer than *limit* items (including none) means the end of the data was reached.
        May raise any exception; the machine converts it into a ``Failed`` status.
        """
        ...
