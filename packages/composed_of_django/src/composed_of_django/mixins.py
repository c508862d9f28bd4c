# composed_of_django/mixins.py
from __future__ import annotations

from typing import Any

from .descriptors import clear_aggregation_cache
from .reflection import get_aggregations


class AggregationsMixin:
    """
    Model mixin: reloading columns from the database drops cached value objects.

    A full refresh clears every cached aggregation. A partial one
    (`refresh_from_db(fields=[...])`, which Django also issues when a deferred
    field is first read) clears only the aggregations mapped over one of the
    reloaded columns.
    """

    def refresh_from_db(self, *args: Any, **kwargs: Any) -> None:
        super().refresh_from_db(*args, **kwargs)
        fields = kwargs.get("fields", args[1] if len(args) > 1 else None)
        if fields is None:
            clear_aggregation_cache(self)
            return
        reloaded = set(fields)
        for aggregation in get_aggregations(type(self)):
            if reloaded.intersection(aggregation.columns):
                clear_aggregation_cache(self, aggregation.name)
