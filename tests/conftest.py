import pytest
from meshwall.colors import ColorPoint


@pytest.fixture
def red_blue_diagonal():
    """Red in the top-left corner, blue in the bottom-right corner."""
    return (
        ColorPoint(0.0, 0.0, "#ff0000", 1.0),
        ColorPoint(1.0, 1.0, "#0000ff", 1.0),
    )


@pytest.fixture
def four_points():
    return (
        ColorPoint(0.2, 0.2, "#ff6b6b", 1.0),
        ColorPoint(0.8, 0.3, "#4ecdc4", 0.8),
        ColorPoint(0.3, 0.8, "#ffe66d", 0.5),
        ColorPoint(0.7, 0.7, "#a8e6cf", 1.0),
    )
