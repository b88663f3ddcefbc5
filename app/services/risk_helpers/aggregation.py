# /app/services/risk_helpers/aggregation.py

from typing import List
import pandas as pd

from ...models.risk_model import ClassAggregate

_AVERAGED_COLUMNS = {
    "rewardPoints": "averageRewardPoints",
    "attendancePercentage": "averageAttendance",
    "cgpa": "averageCGPA",
}


def compute_aggregate(records: List) -> ClassAggregate:
    """
    Plain arithmetic means over every record of a cohort. An empty cohort
    yields the all-zero aggregate; missing values count as zero.
    """
    if not records:
        return ClassAggregate()

    df = pd.DataFrame(
        [{column: getattr(record, column, None) for column in _AVERAGED_COLUMNS} for record in records]
    )
    means = df.astype(float).fillna(0.0).mean()

    return ClassAggregate(
        **{field_name: float(means[column]) for column, field_name in _AVERAGED_COLUMNS.items()},
        totalStudents=len(records),
    )
