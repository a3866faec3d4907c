from pathlib import Path

import matplotlib as mpl
from matplotlib import pyplot as plt
import pytest


def pytest_make_parametrize_id(config, val):
    if isinstance(val, type(lambda: None)) and val.__qualname__ != "<lambda>":
        return val.__qualname__
    if isinstance(val, Path):
        return val.stem


@pytest.fixture
def fig():
    fig = plt.figure(1)
    fig.canvas.callbacks.exception_handler = None
    return fig


@pytest.fixture
def ax(fig):
    return fig.add_subplot(111)


@pytest.fixture(autouse=True)
def cleanup():
    with mpl.rc_context({"axes.unicode_minus": False}):
        try:
            yield
        finally:
            plt.close("all")
