"""Quote data providers.

## Usage

```python
from stockcalc.config import get_settings
from stockcalc.providers import ChartRange, create_quote_client

client = create_quote_client(get_settings())
quote = await client.get_quote("NFLX")
summary = await client.get_range_summary("NFLX", ChartRange.THREE_MONTHS)
await client.close()
```
"""

from stockcalc.providers.base import QuoteProvider
from stockcalc.providers.factory import create_quote_client
from stockcalc.providers.yh_finance import (
    ChartRange,
    PricePoint,
    Quote,
    RangeSummary,
    YHFinanceClient,
)

__all__ = [
    "QuoteProvider",
    "create_quote_client",
    "YHFinanceClient",
    "ChartRange",
    "PricePoint",
    "Quote",
    "RangeSummary",
]
