"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import typer

from screenref.core.config import load_settings
from screenref.core.exceptions import ConfigError
from screenref.core.models import MatcherSettings
from screenref.engine.matcher import Matcher
from screenref.matchers.ocr import configure_tesseract


def fail(message: str) -> typer.Exit:
    typer.echo(typer.style(message, fg=typer.colors.RED), err=True)
    return typer.Exit(code=1)


def build_settings(settings_path: str | None) -> MatcherSettings:
    try:
        settings = load_settings(Path(settings_path) if settings_path else None)
    except ConfigError as e:
        raise fail(str(e)) from e
    configure_tesseract(settings.tesseract_cmd)
    return settings


def build_matcher(document: str, settings: MatcherSettings) -> Matcher:
    try:
        return Matcher.from_file(document, settings=settings)
    except ConfigError as e:
        raise fail(str(e)) from e


def read_screen(path: str) -> np.ndarray:
    screen = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if screen is None:
        raise fail(f"Cannot read screen image: {path}")
    return screen
