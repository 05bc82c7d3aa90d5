"""Lookup of the layout strategy configured on a repository."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from repocore.modules.content.util import LayoutException

from .base import RepositoryLayout
from .default import DefaultLayout
from .legacy import LegacyLayout


class LayoutType(str, Enum):
    DEFAULT = "default"
    LEGACY = "legacy"


_LAYOUTS: Dict[LayoutType, RepositoryLayout] = {
    LayoutType.DEFAULT: DefaultLayout(),
    LayoutType.LEGACY: LegacyLayout(),
}


def get_layout(layout_id: Union[str, LayoutType]) -> RepositoryLayout:
    try:
        layout_type = LayoutType(layout_id)
    except ValueError as exc:
        raise LayoutException(f"Unknown repository layout {layout_id!r}") from exc
    return _LAYOUTS[layout_type]
