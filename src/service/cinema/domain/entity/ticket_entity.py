from datetime import datetime, timezone
from typing import Optional

import attrs


@attrs.define
class Ticket:
    """A sold seat: binds one Seat of one Showtime to one Customer."""

    showtime_id: int
    seat_id: int
    customer_id: int
    purchased_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None
    version_id: Optional[int] = None
