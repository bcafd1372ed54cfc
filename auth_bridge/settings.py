################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: auth_bridge.settings
# Django settings for hosts using directory authentication.
# Any option here can be overridden in auth_bridge/local_django_settings.py

# ---------------------------------- IMPORTS --------------------------------- #
from pathlib import Path
from auth_bridge.utils import load_override, load_overrides
from directory_auth.ldap import defaults as ldap_defaults
import os
################################################################################

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("AUTH_BRIDGE_SECRET_KEY", "change-me")
DEBUG = False
ALLOWED_HOSTS = []

INSTALLED_APPS = [
	"django.contrib.auth",
	"django.contrib.contenttypes",
	"rest_framework",
	"directory_auth",
]

# Directory first, local email/password login for fallback.
AUTHENTICATION_BACKENDS = [
	"directory_auth.auth.backends.DirectoryBackend",
	"directory_auth.auth.backends.EmailAuthBackend",
]

DATABASES = {
	"default": {
		"ENGINE": "django.db.backends.sqlite3",
		"NAME": BASE_DIR / "db.sqlite3",
	}
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True

LOG_LEVEL = os.environ.get("AUTH_BRIDGE_LOG_LEVEL", "INFO")
LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"verbose": {
			"format": "[{asctime}] {levelname} {name} | {message}",
			"style": "{",
		},
	},
	"handlers": {
		"console": {
			"class": "logging.StreamHandler",
			"formatter": "verbose",
		},
	},
	"loggers": {
		"directory_auth": {
			"handlers": ["console"],
			"level": LOG_LEVEL,
			"propagate": False,
		},
		# ldap3 logs through its own logger when its log level is set
		"ldap3": {
			"handlers": ["console"],
			"level": "WARNING",
			"propagate": False,
		},
	},
}

### Directory authentication
# Defaults live in directory_auth.ldap.defaults, set any of the
# LDAP_AUTH_* settings here or in local_django_settings.
load_overrides(globals(), [k for k in dir(ldap_defaults) if k.startswith("LDAP_AUTH_")])
for _key in (
	"SECRET_KEY",
	"DEBUG",
	"ALLOWED_HOSTS",
	"DATABASES",
	"AUTHENTICATION_BACKENDS",
	"LOG_LEVEL",
	"LOGGING",
):
	load_override(globals(), _key)
