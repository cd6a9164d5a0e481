import pytest

from cardwizard.services.app_settings import AppSettings
from cardwizard.utils.unit_converter import convert, to_pixels, to_points

# ------------------------------------------------------------
# Unit conversion
# ------------------------------------------------------------

@pytest.mark.parametrize(
    "value, src, dst, expected",
    [
        (25.4, "mm", "in", 1.0),
        (1.0, "in", "pt", 72.0),
        (2.54, "cm", "mm", 25.4),
        (215.9, "mm", "pt", 612.0),
        (279.4, "mm", "pt", 792.0),
        (3.0, '"', "in", 3.0),
    ],
)
def test_convert(value, src, dst, expected):
    assert convert(value, src, dst) == pytest.approx(expected)


def test_to_points_defaults_to_millimetres():
    assert to_points(25.4) == pytest.approx(72.0)


def test_to_pixels_scales_with_dpi():
    assert to_pixels(25.4, "mm", 300) == pytest.approx(300.0)
    assert to_pixels(72, "pt", 150) == pytest.approx(150.0)


def test_bad_units_and_dpi_raise():
    with pytest.raises(ValueError):
        convert(1, "furlong", "mm")
    with pytest.raises(ValueError):
        to_pixels(1, "mm", 0)

# ------------------------------------------------------------
# AppSettings signals
# ------------------------------------------------------------

def test_print_dpi_emits_only_on_change():
    settings = AppSettings()
    seen = []
    settings.print_dpi_changed.connect(seen.append)
    settings.print_dpi = 300
    settings.print_dpi = 600
    settings.print_dpi = 600
    assert seen == [600]
    assert settings.print_dpi == 600


def test_print_dpi_must_be_positive():
    with pytest.raises(ValueError):
        AppSettings(print_dpi=0)
    settings = AppSettings()
    with pytest.raises(ValueError):
        settings.print_dpi = -72


def test_metadata_changes_are_signalled():
    settings = AppSettings(title="Deck")
    hits = []
    settings.metadata_changed.connect(lambda: hits.append(True))
    settings.title = "Deck"
    settings.author = "Someone"
    assert hits == [True]
    assert settings.author == "Someone"
