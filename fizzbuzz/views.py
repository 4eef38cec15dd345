# fizzbuzz/views.py
from __future__ import annotations

import logging
from typing import Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import NoDataError, NoParameterExpectedError
from .serializers import StatisticSerializer, check_params
from .services import StatisticStore, fizzbuzz_list, get_store

logger = logging.getLogger(__name__)


def _statistic_line(index: int, stat: dict) -> str:
    return (
        f"Request n°{index} : limit={stat['limit']}, int1={stat['int1']}, int2={stat['int2']}, "
        f"str1={stat['str1']}, str2={stat['str2']}, hits={stat['hits']}, "
        f"created_at={stat['created_at']}, updated_at={stat['updated_at']}"
    )


class StoreMixin:
    # Injected with as_view(store=...); defaults to the process-wide store.
    store: Optional[StatisticStore] = None

    def statistic_store(self) -> StatisticStore:
        return self.store if self.store is not None else get_store()


class FizzbuzzListView(StoreMixin, APIView):
    """
    GET /list?limit=&int1=&int2=&str1=&str2=
    Returns the fizzbuzz numbers and counts the request in the statistics.
    Missing or invalid parameters -> 400 with one message per line.
    """
    def get(self, request):
        params = check_params(request.query_params)

        numbers = fizzbuzz_list(params)
        self.statistic_store().record_observation(params)

        logger.info("fizzbuzz numbers printed for %s", params)
        return Response(f"{numbers}\n", status=status.HTTP_200_OK)


class StatisticsView(StoreMixin, APIView):
    """
    GET /statistics
    Returns the most requested parameter sets, one line each (ties included).
    Any query parameter -> 400; nothing recorded yet -> 404.
    """
    def get(self, request):
        if request.query_params:
            raise NoParameterExpectedError()

        statistics = self.statistic_store().top_statistics()
        if not statistics:
            raise NoDataError()

        rows = StatisticSerializer(statistics, many=True).data
        body = "".join(f"{_statistic_line(i, row)}\n" for i, row in enumerate(rows, start=1))
        return Response(body, status=status.HTTP_200_OK)
