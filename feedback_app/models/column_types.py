from sqlalchemy import DateTime
from sqlalchemy.dialects.mysql import DATETIME

# MySQL DATETIME drops fractional seconds unless fsp is given; ordering by
# creation/submission time relies on microsecond precision.
Timestamp = DateTime().with_variant(DATETIME(fsp=6), "mysql")
