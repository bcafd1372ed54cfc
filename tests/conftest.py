import pytest


@pytest.fixture(autouse=True)
def set_debug_off(settings):
	settings.DEBUG = False
