from django.urls import path
from .views import FizzbuzzListView, StatisticsView

urlpatterns = [
    path("list", FizzbuzzListView.as_view(), name="fizzbuzz-list"),
    path("statistics", StatisticsView.as_view(), name="statistics"),
]
