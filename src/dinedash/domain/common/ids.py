from __future__ import annotations

from typing import NewType

RestaurantId = NewType("RestaurantId", int)
