import pytest


@pytest.fixture(autouse=True)
def _console_test_settings(settings):
    # Plain http test client: no redirects to https://testserver/...
    settings.SECURE_SSL_REDIRECT = False
    settings.SESSION_COOKIE_SECURE = False
    settings.CSRF_COOKIE_SECURE = False

    # Known lifecycle peek configuration, whatever the local .env says
    settings.LIFECYCLE_PEEK = {
        "DISABLED_CLASSES": [],
        "SHOW_BUTTON_CSS_CLASSES": "btn btn-sm",
        "HIDE_INTERNAL_STIMULI": True,
        "PORTAL_PATH_PREFIXES": ["/portal/"],
    }
