import pytest

from glyphqr.config import Settings, load_settings
from glyphqr.errors import InvalidParameterError


def test_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.error_correction == "M"
    assert settings.mask_pattern == 1
    assert settings.fill_symbol == "█"
    assert settings.clear_symbol == "░"
    assert settings.bot_token is None


def test_values_from_environment():
    settings = load_settings(
        {
            "QR_ERROR_CORRECTION": "h",
            "QR_MASK_PATTERN": "6",
            "QR_FILL_SYMBOL": "##",
            "QR_CLEAR_SYMBOL": "  ",
            "LOG_LEVEL": "debug",
            "BOT_TOKEN": "123:abc",
        }
    )
    assert settings.error_correction == "H"
    assert settings.mask_pattern == 6
    assert settings.fill_symbol == "##"
    assert settings.clear_symbol == "  "
    assert settings.log_level == "DEBUG"
    assert settings.bot_token == "123:abc"


@pytest.mark.parametrize(
    "environ",
    [
        {"QR_MASK_PATTERN": "nine"},
        {"QR_MASK_PATTERN": "9"},
        {"QR_ERROR_CORRECTION": "Z"},
        {"LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(InvalidParameterError):
        load_settings(environ)
