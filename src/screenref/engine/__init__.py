"""Matching engine."""

from __future__ import annotations

from screenref.engine.matcher import Matcher

__all__ = ["Matcher"]
