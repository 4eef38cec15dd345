# fizzbuzz/models.py
from django.db import models


class Statistic(models.Model):
    limit = models.PositiveBigIntegerField()                    # Max number counted to
    int1 = models.PositiveBigIntegerField()                     # First divisor
    int2 = models.PositiveBigIntegerField()                     # Second divisor
    str1 = models.CharField(max_length=64)                      # Replacement for multiples of int1
    str2 = models.CharField(max_length=64)                      # Replacement for multiples of int2
    hits = models.PositiveBigIntegerField(default=1, db_index=True)  # Times this parameter set was requested
    created_at = models.DateTimeField(auto_now_add=True)        # First observation
    updated_at = models.DateTimeField(auto_now=True)            # Last observation

    class Meta:
        db_table = "statistic"
        constraints = [
            models.UniqueConstraint(fields=["limit", "int1", "int2", "str1", "str2"],
                                     name="uq_statistic_params"),
        ]

    def __str__(self):
        return (
            f"limit={self.limit}, int1={self.int1}, int2={self.int2}, "
            f"str1={self.str1}, str2={self.str2} ({self.hits} hits)"
        )
