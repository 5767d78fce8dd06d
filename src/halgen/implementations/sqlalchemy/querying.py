import typing

from sqlalchemy import orm  # type: ignore

from ...interfaces import PaginatedCollection


class QueryPaginator(PaginatedCollection):
    """
    A :py:class:`PaginatedCollection` over an ORM query.  The total is counted
    once with the ordering stripped, and each page is fetched with LIMIT / OFFSET.

    :param orm.Query query: The query yielding the items.
    :param int item_count_per_page: The number of items per page.
    """

    query: orm.Query
    _item_count_per_page: int
    _total_item_count: typing.Optional[int] = None

    @property
    def total_item_count(self) -> int:
        if self._total_item_count is None:
            self._total_item_count = self.query.order_by(None).count()
        return self._total_item_count

    @property
    def item_count_per_page(self) -> int:
        return self._item_count_per_page

    def get_page_items(self, page: int) -> typing.List[typing.Any]:
        return (
            self.query.limit(self._item_count_per_page)
            .offset((page - 1) * self._item_count_per_page)
            .all()
        )

    def __iter__(self) -> typing.Iterator[typing.Any]:
        return iter(self.query)

    def __init__(self, query: orm.Query, item_count_per_page: int = 10):
        if item_count_per_page < 1:
            raise ValueError("item_count_per_page must be a positive integer")
        self.query = query
        self._item_count_per_page = item_count_per_page
