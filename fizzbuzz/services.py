# fizzbuzz/services.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, List

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Subquery
from django.utils import timezone

from .exceptions import PersistenceError
from .models import Statistic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSet:
    """Validated request parameters; also the deduplication key of a Statistic."""
    limit: int
    int1: int
    int2: int
    str1: str
    str2: str

    def as_lookup(self) -> Dict:
        return asdict(self)


def fizzbuzz_list(params: ParameterSet) -> str:
    """
    Return the fizzbuzz numbers from 1 to params.limit, separated by ", ".

    Rules:
      1) Multiples of both int1 and int2 are replaced by str1 + str2.
      2) Otherwise multiples of int2 are replaced by str2.
      3) Otherwise multiples of int1 are replaced by str1.
      4) Any other number is written as is.
    """
    both = params.str1 + params.str2

    def token(i: int) -> str:
        by_int1 = i % params.int1 == 0
        by_int2 = i % params.int2 == 0
        if by_int1 and by_int2:
            return both
        if by_int2:
            return params.str2
        if by_int1:
            return params.str1
        return str(i)

    return ", ".join(token(i) for i in range(1, params.limit + 1))


class StatisticStore:
    """Owns the lifecycle of Statistic rows: one row per distinct ParameterSet."""

    def record_observation(self, params: ParameterSet) -> Statistic:
        """
        Count one more request for `params`.

        The hit counter is incremented by a single UPDATE; when no row matched,
        the row is inserted with hits=1 inside a savepoint. If a concurrent
        request inserted the same parameters first, the unique constraint
        rejects our insert and we fall back to the increment.
        """
        lookup = params.as_lookup()
        try:
            with transaction.atomic():
                if self._increment(lookup):
                    stat = Statistic.objects.get(**lookup)
                    logger.debug("statistic %s incremented to %s hits", stat.pk, stat.hits)
                    return stat
                try:
                    stat = self._insert(lookup)
                    logger.info("new statistic %s created for %s", stat.pk, params)
                    return stat
                except IntegrityError:
                    # Handle race: another request created the row between our UPDATE and INSERT.
                    self._increment(lookup)
                    return Statistic.objects.get(**lookup)
        except DatabaseError as exc:
            logger.exception("failed to record statistic for %s", params)
            raise PersistenceError() from exc

    def top_statistics(self) -> List[Statistic]:
        """Every statistic sharing the highest hit count, ordered by id."""
        # SELECT * FROM statistic WHERE hits = (SELECT MAX(hits) FROM statistic)
        top_hits = Statistic.objects.order_by("-hits").values("hits")[:1]
        try:
            return list(Statistic.objects.filter(hits=Subquery(top_hits)).order_by("id"))
        except DatabaseError as exc:
            logger.exception("failed to retrieve the top statistics")
            raise PersistenceError() from exc

    def _increment(self, lookup: Dict) -> int:
        return Statistic.objects.filter(**lookup).update(
            hits=F("hits") + 1,
            updated_at=timezone.now(),
        )

    def _insert(self, lookup: Dict) -> Statistic:
        with transaction.atomic():
            return Statistic.objects.create(hits=1, **lookup)


@lru_cache(maxsize=None)
def get_store() -> StatisticStore:
    """Process-wide store handed to the views."""
    return StatisticStore()
