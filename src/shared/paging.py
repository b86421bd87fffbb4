"""Read every record a repository query matches.

Protean query sets return at most one page (100 records by default) from
``all()``. Listings walk the pages with ``offset``/``limit`` until a short
page comes back.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    records = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all().items
        records.extend(page)
        if len(page) < page_size:
            return records
        offset += page_size
