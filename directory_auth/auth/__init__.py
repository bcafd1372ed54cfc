################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: directory_auth.auth
# Entry point used by the host application for every login attempt.

# ---------------------------------- IMPORTS --------------------------------- #
from directory_auth.auth import active_directory, ldap
from directory_auth.auth.base import get_settings
from directory_auth.auth.result import (
	AuthResult,
	AuthResultType,
	AuthResultSuccess,
	AuthResultFallback,
)
from directory_auth.config.settings import DirectoryAuthSettings
################################################################################

__all__ = [
	"authenticate",
	"AuthResult",
	"AuthResultType",
	"AuthResultSuccess",
	"AuthResultFallback",
]


def authenticate(
	account_name: str,
	password: str,
	settings: DirectoryAuthSettings = None,
) -> AuthResult:
	"""Authenticate a login with the configured directory integration.

	Settings are read from Django settings when not given.
	"""
	settings = get_settings(settings)
	if settings.is_ldap_mode:
		return ldap.authenticate(account_name, password, settings=settings)
	return active_directory.authenticate(account_name, password, settings=settings)
