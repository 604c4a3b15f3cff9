# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

HOME = "/"
LOGIN = "/login"


class Router:
    def __init__(self, start: str = HOME):
        self.current = start
        self.history: List[str] = [start]

    def navigate(self, path: str) -> None:
        logger.info(f"[NAV] {self.current} -> {path}")
        self.current = path
        self.history.append(path)


@dataclass(frozen=True)
class Toast:
    title: str
    description: Optional[str] = None
    variant: str = "default"


@dataclass
class Toaster:
    """Collects user-visible notices in the order they were shown."""

    history: List[Toast] = field(default_factory=list)

    def show(self, title: str, description: Optional[str] = None, *, variant: str = "default") -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self.history.append(toast)
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, f"[TOAST] {title}" + (f": {description}" if description else ""))
        return toast

    def success(self, title: str) -> Toast:
        return self.show(title)

    @property
    def last(self) -> Optional[Toast]:
        return self.history[-1] if self.history else None
