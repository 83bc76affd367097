"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _reset_language() -> Iterator[None]:
    """Reset shared i18n state between tests."""
    from chessduel.i18n import set_language

    set_language("English")
    yield
    set_language("English")


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()


@pytest.fixture
def scheduler():
    """Virtual-time scheduler; advance it explicitly."""
    from chessduel.game.scheduler import ManualScheduler

    return ManualScheduler()


@pytest.fixture
def make_controller(scheduler) -> Callable[..., object]:
    """Build a started :class:`SessionController` on the manual scheduler."""
    import random

    from chessduel.game.config import MatchSettings
    from chessduel.game.controller import SessionController
    from chessduel.game.mover import RandomMover

    def _make(**settings_kwargs: object) -> SessionController:
        mover = settings_kwargs.pop("mover", None) or RandomMover(random.Random(7))
        engine_factory = settings_kwargs.pop("engine_factory", None)
        settings = MatchSettings(**settings_kwargs)  # type: ignore[arg-type]
        kwargs: dict[str, object] = {"scheduler": scheduler, "mover": mover}
        if engine_factory is not None:
            kwargs["engine_factory"] = engine_factory
        ctrl = SessionController(settings, **kwargs)  # type: ignore[arg-type]
        ctrl.new_match()
        return ctrl

    return _make
