"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.splits_service import SplitsService as SplitsService


def __getattr__(name: str) -> object:
    if name == "SplitsService":
        from services.splits_service import SplitsService

        return SplitsService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["SplitsService"]
