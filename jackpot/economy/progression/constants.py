from datetime import timedelta
from decimal import Decimal

CYCLE_PERIOD = timedelta(hours=2)
PROGRESS_EXPONENT = Decimal("1.5")
MONEY_QUANT = Decimal("0.01")
