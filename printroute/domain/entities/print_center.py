"""PrintCenter entity — a physical fulfillment site."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PrintCenter:
    id: int | None
    name: str
    is_active: bool = True
    address: str | None = None
    created_at: datetime | None = None
