"""
Synthetic monthly sales for demos and tests.

Each period:
    sales = mean + U(0, mean/5) - mean/10      (±10% noise around the mean)
          + i × trend                          (linear trend)
          × MONTH_FACTORS[month]               (optional seasonality)
    floored at 0.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

import numpy as np
from dateutil.relativedelta import relativedelta

from .ingest import parse_date


MONTH_FACTORS = {
    1: 0.8,
    2: 0.7,
    3: 0.9,
    4: 1.0,
    5: 1.1,
    6: 1.2,
    7: 1.3,
    8: 1.2,
    9: 1.1,
    10: 0.9,
    11: 1.0,
    12: 1.5,
}


def create_example_data(
    start_date: Union[str, date] = "2023-01-01",
    periods: int = 24,
    mean_sales: float = 100.0,
    seasonality: bool = True,
    trend: float = 0.5,
    random_seed: Optional[int] = 42,
) -> List[Dict[str, Any]]:
    """
    Generate monthly sales rows.

    Args:
        start_date: First period (ISO string or date)
        periods: Number of monthly rows
        mean_sales: Average sales level
        seasonality: Apply MONTH_FACTORS
        trend: Units added per period (ignored when <= 0)
        random_seed: Seed for reproducibility (None = non-deterministic)

    Returns:
        List of {"date": "YYYY-MM-DD", "sales": float} rows, oldest first

    Example:
        >>> rows = create_example_data(periods=12)
        >>> len(rows), rows[0]["date"]
        (12, '2023-01-01')
    """
    if periods < 1:
        raise ValueError(f"periods must be >= 1, got {periods}")
    if mean_sales < 0:
        raise ValueError(f"mean_sales must be >= 0, got {mean_sales}")

    start = parse_date(start_date)
    if start is None:
        raise ValueError(f"Invalid start_date: {start_date!r}")

    rng = np.random.default_rng(random_seed)
    noise = rng.uniform(0.0, mean_sales / 5, size=periods) if mean_sales > 0 else np.zeros(periods)

    rows = []
    for i in range(periods):
        period_date = start + relativedelta(months=i)

        sales = mean_sales + noise[i] - mean_sales / 10
        if trend > 0:
            sales += i * trend
        if seasonality:
            sales *= MONTH_FACTORS[period_date.month]

        rows.append({
            "date": period_date.isoformat(),
            "sales": max(0.0, float(sales)),
        })

    return rows
