"""Type aliases used across the Payrail package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

Cents = int
Metadata = Mapping[str, Any]
