import pytest
from server.models import ConversionSettings, ConversionRequest, ConversionResponse

def test_conversion_settings_model():
    settings = ConversionSettings()
    assert settings.provider == "gemini"
    assert settings.summarize is True
    assert settings.batch_size == 13
    assert settings.batch_delay == 62.0
    assert settings.theme is None

def test_conversion_settings_batch_size_limit():
    with pytest.raises(ValueError):
        ConversionSettings(batch_size=16)
    with pytest.raises(ValueError):
        ConversionSettings(batch_size=0)

def test_conversion_request_model():
    request = ConversionRequest(markdown="# A\nbody", summarize=False, theme="gaia")
    assert request.markdown == "# A\nbody"
    assert request.title is None
    assert request.theme == "gaia"

def test_conversion_response_model():
    response = ConversionResponse(marp="---\nmarp: true\n---\n")
    assert response.slide_count == 0
    assert response.failed_slides == []
